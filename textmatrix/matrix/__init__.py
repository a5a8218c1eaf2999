from textmatrix.matrix.term_index import TERM_ORDERS, TermIndex
from textmatrix.matrix.sparse_matrix import DOCUMENT_TERM, ORIENTATIONS, TERM_DOCUMENT, SparseMatrix
from textmatrix.matrix.base import BaseMatrixBuilder, count_terms
from textmatrix.matrix.standard_builder import StandardMatrixBuilder, build_matrix
from textmatrix.matrix.parallel_builder import ParallelMatrixBuilder
from textmatrix.matrix.factory import MatrixBuilderFactory
from textmatrix.matrix.reducer import SparsityReducer, remove_sparse_terms, validate_threshold
from textmatrix.matrix.weighting import SCHEMES, inverse_document_frequency, weight_matrix

__all__ = [
    'TERM_ORDERS',
    'TermIndex',
    'TERM_DOCUMENT',
    'DOCUMENT_TERM',
    'ORIENTATIONS',
    'SparseMatrix',
    'BaseMatrixBuilder',
    'count_terms',
    'StandardMatrixBuilder',
    'ParallelMatrixBuilder',
    'build_matrix',
    'MatrixBuilderFactory',
    'SparsityReducer',
    'remove_sparse_terms',
    'validate_threshold',
    'SCHEMES',
    'inverse_document_frequency',
    'weight_matrix'
]
