# textmatrix/matrix/sparse_matrix.py
"""
Sparse Count Matrix

SparseMatrix pairs a scipy CSR matrix of positive integer counts with the
TermIndex and document ids labelling its axes. In 'term-document'
orientation rows are terms and columns are documents; 'document-term' is the
transpose. Cells that are not stored are 0.

Frequency queries (document frequencies, totals, most frequent terms,
frequency ranges and term associations) work the same in both orientations.
"""
import heapq
import json
import math
import pickle
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix

from textmatrix.errors import ConfigurationError
from textmatrix.matrix.term_index import TermIndex

TERM_DOCUMENT = "term-document"
DOCUMENT_TERM = "document-term"
ORIENTATIONS = (TERM_DOCUMENT, DOCUMENT_TERM)


def check_orientation(orientation: str) -> str:
    if orientation not in ORIENTATIONS:
        raise ConfigurationError(f"Unknown orientation {orientation!r}; expected one of {ORIENTATIONS}")
    return orientation


class SparseMatrix:
    """
    Attributes:
        matrix (csr_matrix): Canonical CSR storage (no duplicates, no explicit zeros)
        term_index (TermIndex): Term labels of the term axis
        doc_ids (tuple): Document labels of the document axis, in corpus order
        orientation (str): 'term-document' or 'document-term'
    """
    def __init__(self, matrix, term_index: TermIndex, doc_ids: Sequence[Hashable],
                 orientation: str = TERM_DOCUMENT):
        self.orientation = check_orientation(orientation)
        self.term_index = term_index
        self.doc_ids = tuple(doc_ids)
        self._doc_positions = {doc_id: pos for pos, doc_id in enumerate(self.doc_ids)}

        # astype copies, so canonicalizing never touches the caller's matrix
        matrix = csr_matrix(matrix).astype(np.int64)
        matrix.sum_duplicates()
        matrix.eliminate_zeros()

        expected = self._expected_shape()
        if matrix.shape != expected:
            raise ValueError(f"Matrix shape {matrix.shape} does not match {self.orientation} "
                             f"dimensions {expected}")
        if matrix.nnz and matrix.data.min() < 0:
            raise ValueError("Count matrix may not hold negative values")
        self.matrix = matrix

    def _expected_shape(self) -> Tuple[int, int]:
        if self.orientation == TERM_DOCUMENT:
            return len(self.term_index), len(self.doc_ids)
        return len(self.doc_ids), len(self.term_index)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    @property
    def n_terms(self) -> int:
        return len(self.term_index)

    @property
    def n_docs(self) -> int:
        return len(self.doc_ids)

    @property
    def nnz(self) -> int:
        return self.matrix.nnz

    @property
    def terms(self) -> Tuple[str, ...]:
        return self.term_index.terms

    @property
    def term_axis(self) -> int:
        return 0 if self.orientation == TERM_DOCUMENT else 1

    def __repr__(self):
        return (f"SparseMatrix(orientation={self.orientation!r}, terms={self.n_terms}, "
                f"documents={self.n_docs}, nonzero={self.nnz})")

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (self.orientation == other.orientation
                and self.term_index == other.term_index
                and self.doc_ids == other.doc_ids
                and self.shape == other.shape
                and (self.matrix != other.matrix).nnz == 0)

    def term_major(self) -> csr_matrix:
        """The counts with terms as rows, whatever the orientation."""
        if self.orientation == TERM_DOCUMENT:
            return self.matrix
        return self.matrix.T.tocsr()

    def transpose(self) -> "SparseMatrix":
        """The same counts in the other orientation."""
        other = DOCUMENT_TERM if self.orientation == TERM_DOCUMENT else TERM_DOCUMENT
        return SparseMatrix(self.matrix.T.tocsr(), self.term_index, self.doc_ids, other)

    @property
    def T(self) -> "SparseMatrix":
        return self.transpose()

    def get(self, term: str, doc_id: Hashable) -> int:
        """Count of term in a document; 0 when either label is unknown or the cell is empty."""
        term_id = self.term_index.get(term)
        doc_pos = self._doc_positions.get(doc_id)
        if term_id is None or doc_pos is None:
            return 0
        if self.orientation == TERM_DOCUMENT:
            return int(self.matrix[term_id, doc_pos])
        return int(self.matrix[doc_pos, term_id])

    def nonzero_entries(self) -> Dict[Tuple[str, Hashable], int]:
        """Every stored cell as {(term, doc_id): count}."""
        coo = self.matrix.tocoo()
        if self.orientation == TERM_DOCUMENT:
            term_ids, doc_positions = coo.row, coo.col
        else:
            term_ids, doc_positions = coo.col, coo.row
        return {
            (self.term_index.term(int(t)), self.doc_ids[int(d)]): int(v)
            for t, d, v in zip(term_ids, doc_positions, coo.data)
        }

    def doc_freqs(self) -> np.ndarray:
        """Number of documents containing each term, indexed by term id."""
        # Storage is canonical, so stored cells per row equal documents containing the term
        return np.diff(self.term_major().indptr).astype(np.int64)

    def term_totals(self) -> np.ndarray:
        """Total count of each term across all documents, indexed by term id."""
        return np.asarray(self.term_major().sum(axis=1), dtype=np.int64).ravel()

    def doc_lengths(self) -> np.ndarray:
        """Number of counted tokens per document, in corpus order."""
        return np.asarray(self.term_major().sum(axis=0), dtype=np.int64).ravel()

    def term_sparsity(self) -> np.ndarray:
        """1 - df / N for each term (empty when there are no documents)."""
        if not self.n_docs:
            return np.zeros(self.n_terms, dtype=np.float64)
        return 1.0 - self.doc_freqs() / self.n_docs

    def select_terms(self, term_ids: Iterable[int]) -> "SparseMatrix":
        """
        Keep only the given term ids, in the given order. The term index is
        rebuilt with contiguous ids and the document axis is untouched.
        """
        term_ids = list(term_ids)
        term_index = self.term_index.subset(term_ids)
        if self.orientation == TERM_DOCUMENT:
            matrix = self.matrix[term_ids, :] if term_ids else csr_matrix((0, self.n_docs), dtype=np.int64)
        else:
            matrix = self.matrix[:, term_ids] if term_ids else csr_matrix((self.n_docs, 0), dtype=np.int64)
        return SparseMatrix(matrix, term_index, self.doc_ids, self.orientation)

    def most_frequent_terms(self, n: int = 10) -> List[Tuple[str, int]]:
        totals = self.term_totals()
        # nlargest keeps ties in term id order
        return heapq.nlargest(n, ((term, int(total)) for term, total in zip(self.terms, totals)),
                              key=lambda x: x[1])

    def find_freq_terms(self, low: float = 0, high: float = math.inf) -> List[str]:
        """Terms whose total count lies in [low, high], in term id order."""
        totals = self.term_totals()
        return [term for term, total in zip(self.terms, totals) if low <= total <= high]

    def find_associations(self, term: str, corlimit: float = 0.0) -> List[Tuple[str, float]]:
        """
        Terms whose counts correlate with the given term's across documents.

        Args:
            term (str): The reference term
            corlimit (float): Minimum Pearson correlation to report

        Returns:
            List[Tuple[str, float]]: (term, correlation) pairs, highest first,
                                     ties in term id order
        """
        term_id = self.term_index.get(term)
        n = self.n_docs
        if term_id is None or n < 2:
            return []

        counts = self.term_major().astype(np.float64)
        x = counts[term_id].toarray().ravel()
        x_centered = x - x.mean()
        x_ss = float(x_centered @ x_centered)
        if x_ss == 0.0:
            return []

        sums = np.asarray(counts.sum(axis=1)).ravel()
        sq_sums = np.asarray(counts.multiply(counts).sum(axis=1)).ravel()
        y_ss = sq_sums - sums ** 2 / n
        # sum((x - mean x) * y) equals sum((x - mean x) * (y - mean y))
        cross = counts @ x_centered

        associations = []
        for other_id, (c, ss) in enumerate(zip(cross, y_ss)):
            if other_id == term_id or ss <= 1e-12:
                continue
            r = float(c / math.sqrt(x_ss * ss))
            if r >= corlimit:
                associations.append((self.term_index.term(other_id), r))
        return sorted(associations, key=lambda x: -x[1])

    def to_dense(self) -> np.ndarray:
        return self.matrix.toarray()

    def to_frame(self) -> pd.DataFrame:
        """Dense pandas view labelled by terms and document ids."""
        terms = list(self.terms)
        docs = list(self.doc_ids)
        if self.orientation == TERM_DOCUMENT:
            return pd.DataFrame(self.to_dense(), index=terms, columns=docs)
        return pd.DataFrame(self.to_dense(), index=docs, columns=terms)

    def get_memory_usage(self) -> Dict[str, int]:
        matrix_size = self.matrix.data.nbytes + self.matrix.indices.nbytes + self.matrix.indptr.nbytes
        term_index_size = len(pickle.dumps(self.term_index.terms))
        doc_ids_size = len(pickle.dumps(self.doc_ids))
        return {
            "Sparse Storage": matrix_size,
            "Term Index": term_index_size,
            "Document Ids": doc_ids_size,
            "Total Memory Usage": matrix_size + term_index_size + doc_ids_size
        }

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get comprehensive statistics about the matrix.

        Returns:
            Dict[str, Any]: Dictionary containing various statistics about the matrix
        """
        doc_lengths = self.doc_lengths()
        doc_freqs = self.doc_freqs()
        cells = self.n_terms * self.n_docs

        return {
            "orientation": self.orientation,
            "document_count": self.n_docs,
            "vocabulary_size": self.n_terms,
            "nonzero_entries": self.nnz,
            "sparsity": 1.0 - self.nnz / cells if cells else 0.0,
            "avg_doc_length": float(doc_lengths.mean()) if doc_lengths.size else 0.0,
            "max_doc_length": int(doc_lengths.max()) if doc_lengths.size else 0,
            "min_doc_length": int(doc_lengths.min()) if doc_lengths.size else 0,
            "avg_doc_freq": float(doc_freqs.mean()) if doc_freqs.size else 0.0,
            "max_doc_freq": int(doc_freqs.max()) if doc_freqs.size else 0,
            "min_doc_freq": int(doc_freqs.min()) if doc_freqs.size else 0,
            "memory_usage": self.get_memory_usage()
        }

    def export_json(self, filepath: Optional[str] = None) -> Optional[str]:
        """
        Export the matrix as JSON: term -> {document id -> count}.

        Returns the JSON string when no filepath is given.
        """
        term_doc_freqs = {term: {} for term in self.terms}
        for (term, doc_id), count in self.nonzero_entries().items():
            term_doc_freqs[term][str(doc_id)] = count

        export_data = {
            "orientation": self.orientation,
            "document_count": self.n_docs,
            "vocabulary_size": self.n_terms,
            "document_ids": [str(d) for d in self.doc_ids],
            "terms": list(self.terms),
            "top_terms": self.most_frequent_terms(20),
            "term_doc_freqs": term_doc_freqs
        }

        json_str = json.dumps(export_data, indent=2)

        if filepath:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write(json_str)
            return None
        return json_str
