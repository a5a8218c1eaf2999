# textmatrix/matrix/base.py
"""
Matrix Builder Interface

Builders turn a tokenized corpus into a SparseMatrix. Counting is done per
document into local Counters (possibly in worker processes); a single
merge pass then walks the documents in corpus order, assigns term ids and
fills the coordinate arrays. Term ids therefore never depend on how the
counting work was scheduled.
"""
import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.sparse import coo_matrix

from textmatrix.errors import ConfigurationError
from textmatrix.matrix.sparse_matrix import TERM_DOCUMENT, SparseMatrix, check_orientation
from textmatrix.matrix.term_index import TERM_ORDERS, TermIndex
from textmatrix.text_processor.tokenizer import WhitespaceTokenizer

logger = logging.getLogger('textmatrix.matrix')


def count_terms(tokens: Sequence[str], min_word_length: int = 1,
                max_word_length: Optional[int] = None) -> Dict[str, int]:
    """Count the tokens of one document that pass the length filter."""
    counts = Counter()
    for token in tokens:
        if len(token) < min_word_length:
            continue
        if max_word_length is not None and len(token) > max_word_length:
            continue
        counts[token] += 1
    return counts


class BaseMatrixBuilder(ABC):
    """
    Attributes:
        orientation (str): 'term-document' or 'document-term'
        term_order (str): 'first_seen' or 'lexicographic'
        min_word_length (int): Shortest term kept
        max_word_length (int, optional): Longest term kept
        bounds (tuple, optional): Inclusive (min_df, max_df) document-frequency bounds;
                                  either side may be None
        tokenizer (BaseTokenizer): Used for documents that have no tokens yet
        profiler (Profiler, optional): Performance profiler for timing operations
    """
    def __init__(self, orientation: str = TERM_DOCUMENT, term_order: str = "first_seen",
                 min_word_length: int = 1, max_word_length: Optional[int] = None,
                 bounds: Optional[Tuple[Optional[int], Optional[int]]] = None,
                 tokenizer=None, profiler=None):
        self.orientation = check_orientation(orientation)
        if term_order not in TERM_ORDERS:
            raise ConfigurationError(f"Unknown term order {term_order!r}; expected one of {TERM_ORDERS}")
        if min_word_length < 0 or (max_word_length is not None and max_word_length < min_word_length):
            raise ConfigurationError(f"Invalid word length range [{min_word_length}, {max_word_length}]")
        if bounds is not None and len(bounds) != 2:
            raise ConfigurationError(f"bounds must be a (min_df, max_df) pair, got {bounds!r}")
        self.term_order = term_order
        self.min_word_length = min_word_length
        self.max_word_length = max_word_length
        self.bounds = tuple(bounds) if bounds is not None else None
        self.tokenizer = tokenizer or WhitespaceTokenizer()
        self.profiler = profiler

    def build(self, corpus) -> SparseMatrix:
        """
        Count each distinct term per document.

        An empty corpus gives a valid matrix with zero terms and zero documents.

        Returns:
            SparseMatrix: The count matrix; its term_index maps terms to ids
        """
        if not corpus.is_tokenized:
            corpus = corpus.tokenize(self.tokenizer)
        token_lists = corpus.token_lists()

        doc_counts = self._count_documents(token_lists)

        if self.profiler:
            with self.profiler.timer("Matrix Assembly"):
                matrix = self._assemble(doc_counts, corpus.ids)
        else:
            matrix = self._assemble(doc_counts, corpus.ids)

        logger.info(f"Built {matrix.orientation} matrix: {matrix.n_terms} terms x "
                    f"{matrix.n_docs} documents, {matrix.nnz} non-zero entries")
        return matrix

    @abstractmethod
    def _count_documents(self, token_lists: List[Sequence[str]]) -> List[Dict[str, int]]: ...

    def _within_bounds(self, doc_freq: int) -> bool:
        if self.bounds is None:
            return True
        low, high = self.bounds
        return (low is None or doc_freq >= low) and (high is None or doc_freq <= high)

    def _assemble(self, doc_counts: List[Dict[str, int]], doc_ids) -> SparseMatrix:
        # Single writer: ids are assigned walking documents in corpus order
        first_seen = TermIndex.from_token_lists(doc_counts, order=self.term_order)

        if self.bounds is not None:
            doc_freqs = Counter(term for counts in doc_counts for term in counts)
            term_index = TermIndex(t for t in first_seen if self._within_bounds(doc_freqs[t]))
        else:
            term_index = first_seen

        term_rows, doc_cols, values = [], [], []
        for doc_pos, counts in enumerate(doc_counts):
            for term, count in counts.items():
                term_id = term_index.get(term)
                if term_id is None:
                    continue
                term_rows.append(term_id)
                doc_cols.append(doc_pos)
                values.append(count)

        shape = (len(term_index), len(doc_counts))
        counts_matrix = coo_matrix(
            (np.asarray(values, dtype=np.int64),
             (np.asarray(term_rows, dtype=np.int64), np.asarray(doc_cols, dtype=np.int64))),
            shape=shape
        ).tocsr()

        if self.orientation != TERM_DOCUMENT:
            counts_matrix = counts_matrix.T.tocsr()
        return SparseMatrix(counts_matrix, term_index, doc_ids, self.orientation)
