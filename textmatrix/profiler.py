"""
Performance Profiler

This module provides a lightweight profiler used to time the stages of the
text matrix workflow (pipeline, tokenization, matrix construction, pruning)
and to route diagnostic messages to the package logger.
"""
import logging
import time
from io import StringIO


class Profiler:
    """
    Collects named timings and diagnostic messages.

    Attributes:
        timings (dict): Mapping of task label to elapsed seconds
        messages (list): Messages passed to log_message, in order
    """
    def __init__(self, logger_name='textmatrix'):
        self.timings = {}
        self.messages = []
        self.start_time = None
        self.paused_time = 0.0
        self.logger = logging.getLogger(logger_name)

    def timer(self, task_name):
        """Returns a context manager to time a code block."""
        return Timer(task_name, self)

    def log_message(self, message, level=logging.INFO):
        """Record a message and forward it to the logger."""
        self.messages.append(message)
        self.logger.log(level, message)

    def start_global_timer(self):
        """Starts the global execution timer."""
        self.start_time = time.time()

    def pause_global_timer(self):
        if self.start_time is not None:
            self.paused_time += time.time() - self.start_time
            self.start_time = None

    def resume_global_timer(self):
        if self.start_time is None:
            self.start_time = time.time() - self.paused_time
            self.paused_time = 0.0

    def get_global_time(self):
        if self.start_time is None:
            return self.paused_time
        return time.time() - self.start_time + self.paused_time

    def generate_report(self, doc_count: int = None, vocab_size: int = None,
                        filename: str = None) -> str:
        """
        Build the timing report and optionally write it to a file.

        Args:
            doc_count (int, optional): Number of documents processed
            vocab_size (int, optional): Number of terms in the final matrix
            filename (str, optional): Path to write the report to

        Returns:
            str: The formatted report
        """
        report = StringIO()

        report.write("=== Timing Breakdown ===\n")
        for task, duration in self.timings.items():
            report.write(f"{task}: {duration:.4f}s\n")

        tracked_total = sum(self.timings.values())
        report.write(f"\nTracked Operations Total: {tracked_total:.4f}s\n")
        if self.start_time is not None or self.paused_time:
            report.write(f"Global Time: {self.get_global_time():.4f}s\n")

        if doc_count is not None:
            report.write(f"Documents: {doc_count:,}\n")
        if vocab_size is not None:
            report.write(f"Terms: {vocab_size:,}\n")

        report_content = report.getvalue()

        if filename:
            with open(filename, "w", encoding="utf-8") as f:
                f.write(report_content)

        return report_content


class Timer:
    def __init__(self, task_name, profiler):
        self.task_name = task_name
        self.profiler = profiler

    def __enter__(self):
        self.start = time.time()
        return self

    def __exit__(self, *args):
        elapsed = time.time() - self.start
        # Repeated labels accumulate
        self.profiler.timings[self.task_name] = self.profiler.timings.get(self.task_name, 0.0) + elapsed
