# textmatrix/matrix/reducer.py
"""
Sparsity Reducer

Removes terms that are absent from too many documents. The sparsity of a
term is 1 - (documents containing it) / (total documents); a term is kept
when its sparsity is at most max_sparsity. Documents are never removed, and
the surviving terms keep their relative order under a re-numbered index.
"""
import logging
import math
from numbers import Real

import numpy as np

from textmatrix.errors import ThresholdOutOfRangeError
from textmatrix.matrix.sparse_matrix import SparseMatrix

logger = logging.getLogger('textmatrix.matrix')

# Absorbs float error in 1 - df/N (e.g. 1 - 2/3 > 1/3)
_TOLERANCE = 1e-12


def validate_threshold(max_sparsity) -> float:
    if isinstance(max_sparsity, bool) or not isinstance(max_sparsity, Real):
        raise ThresholdOutOfRangeError(max_sparsity)
    if math.isnan(max_sparsity) or not 0 <= max_sparsity < 1:
        raise ThresholdOutOfRangeError(max_sparsity)
    return float(max_sparsity)


class SparsityReducer:
    """
    Attributes:
        max_sparsity (float): Retention threshold in [0, 1)
        profiler (Profiler, optional): Performance profiler for timing operations
    """
    def __init__(self, max_sparsity: float, profiler=None):
        self.max_sparsity = validate_threshold(max_sparsity)
        self.profiler = profiler

    def retained_term_ids(self, matrix: SparseMatrix) -> np.ndarray:
        if not matrix.n_docs:
            return np.arange(matrix.n_terms)
        keep = matrix.term_sparsity() <= self.max_sparsity + _TOLERANCE
        return np.flatnonzero(keep)

    def prune(self, matrix: SparseMatrix) -> SparseMatrix:
        """
        Returns:
            SparseMatrix: A matrix over the surviving terms and all documents
        """
        if self.profiler:
            with self.profiler.timer("Sparse Term Removal"):
                kept = self.retained_term_ids(matrix)
        else:
            kept = self.retained_term_ids(matrix)

        logger.info(f"Removed {matrix.n_terms - len(kept)} of {matrix.n_terms} terms "
                    f"(max_sparsity={self.max_sparsity})")
        return matrix.select_terms(int(i) for i in kept)


def remove_sparse_terms(matrix: SparseMatrix, max_sparsity: float, profiler=None) -> SparseMatrix:
    """Prune terms whose sparsity exceeds max_sparsity."""
    return SparsityReducer(max_sparsity, profiler).prune(matrix)
