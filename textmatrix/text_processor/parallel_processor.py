# textmatrix/text_processor/parallel_processor.py
"""
Parallel Text Processor

Distributes document normalization and tokenization across worker
processes. Documents are independent, so each worker runs the full pipeline
on its own batch; results come back in submission order, which keeps the
output corpus aligned with the input.
"""
import logging
from multiprocessing import Pool, cpu_count
from typing import List, Tuple

from textmatrix.text_processor.standard_processor import StandardTextProcessor

logger = logging.getLogger('textmatrix.pipeline')


def _process_batch(args) -> List[Tuple[str, List[str], Tuple[bool, ...]]]:
    """
    Worker entry point: normalize and tokenize a batch of texts.

    Args:
        args: (pipeline, tokenizer, texts)

    Returns:
        List of (normalized text, tokens, per-step change flags) per text
    """
    pipeline, tokenizer, texts = args
    results = []
    for text in texts:
        normalized, changed = pipeline.run_text(text)
        results.append((normalized, tokenizer.tokenize(normalized), changed))
    return results


class ParallelTextProcessor(StandardTextProcessor):
    """
    Attributes:
        num_workers (int): Number of worker processes to use
        batch_size (int, optional): Documents per batch; computed when None
    """
    def __init__(self, pipeline=None, tokenizer=None, profiler=None,
                 num_workers=None, batch_size=None):
        super().__init__(pipeline, tokenizer, profiler)
        self.num_workers = num_workers or self.get_optimal_num_workers()
        self.batch_size = batch_size

    def process(self, corpus):
        timer_label = f"Parallel Text Processing ({self.num_workers} workers)"

        if self.profiler:
            with self.profiler.timer(timer_label):
                results = self._parallel_process_texts(corpus.texts)
        else:
            results = self._parallel_process_texts(corpus.texts)

        texts = [text for text, _, _ in results]
        token_lists = [tokens for _, tokens, _ in results]
        changed = [any(flags[i] for _, _, flags in results) for i in range(len(self.pipeline))]
        self.pipeline.diagnose(changed, doc_count=len(corpus))

        return corpus.with_texts(texts).with_tokens(token_lists)

    def _parallel_process_texts(self, texts):
        # Sequential processing is faster below one document per worker
        if len(texts) <= self.num_workers:
            return [self._process_single_text(t) for t in texts]

        batch_size = self.batch_size or max(10, min(1000, len(texts) // (self.num_workers * 2)))
        batches = [(self.pipeline, self.tokenizer, texts[i:i + batch_size])
                   for i in range(0, len(texts), batch_size)]

        try:
            with Pool(processes=min(self.num_workers, len(batches))) as pool:
                batch_results = pool.map(_process_batch, batches)
        except Exception as e:
            # Fall back to sequential processing if parallel processing fails
            message = f"Error in parallel text processing: {e}. Falling back to sequential."
            if self.profiler:
                self.profiler.log_message(message, level=logging.WARNING)
            else:
                logger.warning(message)
            return [self._process_single_text(t) for t in texts]

        return [result for batch in batch_results for result in batch]

    @staticmethod
    def get_optimal_num_workers() -> int:
        num_cores = cpu_count()
        return min(max(1, num_cores - 1), 16)
