# textmatrix/matrix/parallel_builder.py
"""
Parallel Matrix Builder

Counts terms per document in worker processes. Each worker only produces
local Counters keyed by term string; the shared TermIndex and the sparse
arrays are filled afterwards by the single-writer merge in BaseMatrixBuilder,
so the result is identical to the sequential builder's.
"""
import logging
from multiprocessing import Pool, cpu_count
from typing import Dict, List, Sequence, Tuple

from textmatrix.matrix.base import BaseMatrixBuilder, count_terms

logger = logging.getLogger('textmatrix.matrix')


def _count_batch(args: Tuple) -> List[Dict[str, int]]:
    """
    Worker entry point: count terms for a batch of documents.

    Args:
        args: (token_lists, min_word_length, max_word_length)
    """
    token_lists, min_word_length, max_word_length = args
    return [count_terms(tokens, min_word_length, max_word_length) for tokens in token_lists]


class ParallelMatrixBuilder(BaseMatrixBuilder):
    """
    Attributes:
        num_workers (int): Number of worker processes to use
        batch_size (int, optional): Documents per batch; computed when None
    """
    def __init__(self, *args, num_workers=None, batch_size=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.num_workers = num_workers or self.get_optimal_num_workers()
        self.batch_size = batch_size

    def _count_documents(self, token_lists: List[Sequence[str]]) -> List[Dict[str, int]]:
        timer_label = f"Parallel Term Counting ({self.num_workers} workers)"

        if self.profiler:
            with self.profiler.timer(timer_label):
                return self._parallel_count(token_lists)
        return self._parallel_count(token_lists)

    def _sequential_count(self, token_lists):
        return _count_batch((token_lists, self.min_word_length, self.max_word_length))

    def _parallel_count(self, token_lists):
        # Only use parallel processing if there is enough work to justify the overhead
        if len(token_lists) <= self.num_workers:
            return self._sequential_count(token_lists)

        batch_size = self.batch_size or max(10, min(1000, len(token_lists) // (self.num_workers * 2)))
        batches = [(list(token_lists[i:i + batch_size]), self.min_word_length, self.max_word_length)
                   for i in range(0, len(token_lists), batch_size)]

        try:
            with Pool(processes=min(self.num_workers, len(batches))) as pool:
                # map returns batches in submission order
                batch_results = pool.map(_count_batch, batches)
        except Exception as e:
            message = f"Error in parallel term counting: {e}. Falling back to sequential."
            if self.profiler:
                self.profiler.log_message(message, level=logging.WARNING)
            else:
                logger.warning(message)
            return self._sequential_count(token_lists)

        return [counts for batch in batch_results for counts in batch]

    @staticmethod
    def get_optimal_num_workers() -> int:
        num_cores = cpu_count()
        return min(max(1, num_cores - 1), 16)  # Reserve one core for system tasks
