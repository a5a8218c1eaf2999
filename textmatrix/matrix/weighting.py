# textmatrix/matrix/weighting.py
"""
Term Weighting

Derives float-valued weight matrices from a count matrix:

- tf:        raw term frequency
- tfidf:     tf * log10(N / df)
- sublinear: (1 + log10(tf)) * log10(N / df), a dampened term frequency
- binary:    1 where the term occurs

The result is a scipy CSR matrix in the count matrix's orientation.
"""
import numpy as np
from scipy.sparse import csr_matrix

from textmatrix.errors import ConfigurationError
from textmatrix.matrix.sparse_matrix import TERM_DOCUMENT, SparseMatrix

SCHEMES = ("tf", "tfidf", "sublinear", "binary")


def inverse_document_frequency(matrix: SparseMatrix) -> np.ndarray:
    """log10(N / df) per term id; zero-length when the matrix has no terms."""
    if not matrix.n_docs:
        return np.zeros(matrix.n_terms, dtype=np.float64)
    dfs = matrix.doc_freqs().astype(np.float64)
    return np.log10(matrix.n_docs / np.maximum(dfs, 1.0))


def weight_matrix(matrix: SparseMatrix, scheme: str = "tf") -> csr_matrix:
    """
    Apply a weighting scheme to a count matrix.

    Args:
        matrix (SparseMatrix): Count matrix
        scheme (str): One of 'tf', 'tfidf', 'sublinear', 'binary'

    Returns:
        csr_matrix: Float weights with the same shape and orientation
    """
    if scheme not in SCHEMES:
        raise ConfigurationError(f"Unknown weighting scheme {scheme!r}; expected one of {SCHEMES}")

    counts = matrix.term_major().astype(np.float64)

    if scheme == "tf":
        weighted = counts
    elif scheme == "binary":
        weighted = csr_matrix((np.ones_like(counts.data), counts.indices, counts.indptr), shape=counts.shape)
    else:
        if scheme == "sublinear":
            counts = csr_matrix((1 + np.log10(counts.data), counts.indices, counts.indptr), shape=counts.shape)
        idf = inverse_document_frequency(matrix)
        # Term id of every stored value, read off the CSR row pointers
        term_ids = np.repeat(np.arange(counts.shape[0]), np.diff(counts.indptr))
        weighted = csr_matrix((counts.data * idf[term_ids], counts.indices, counts.indptr), shape=counts.shape)

    if matrix.orientation != TERM_DOCUMENT:
        weighted = weighted.T.tocsr()
    return weighted
