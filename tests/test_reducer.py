import math

import pytest

from textmatrix.corpus import CorpusBuilder
from textmatrix.errors import ThresholdOutOfRangeError
from textmatrix.matrix import DOCUMENT_TERM, SparsityReducer, build_matrix, remove_sparse_terms
from textmatrix.profiler import Profiler


def test_zero_keeps_only_universal_terms(prune_corpus):
    pruned = remove_sparse_terms(build_matrix(prune_corpus), 0)
    assert pruned.terms == ("a",)
    assert pruned.shape == (1, 3)


def test_threshold_near_one_keeps_everything(prune_corpus):
    matrix = build_matrix(prune_corpus)
    assert remove_sparse_terms(matrix, 0.99) == matrix


def test_boundary_sparsity_is_retained(prune_corpus):
    # b is absent from exactly one of three documents
    pruned = remove_sparse_terms(build_matrix(prune_corpus), 1 / 3)
    assert pruned.terms == ("a", "b")


def test_pruning_never_removes_documents(prune_corpus):
    matrix = build_matrix(prune_corpus, DOCUMENT_TERM)
    pruned = remove_sparse_terms(matrix, 0.5)

    assert pruned.shape == (3, 2)
    assert pruned.doc_ids == matrix.doc_ids
    assert pruned.term_index["b"] == 1
    assert pruned.get("b", 1) == 1


def test_pruning_is_idempotent(prune_corpus):
    once = remove_sparse_terms(build_matrix(prune_corpus), 0.5)
    twice = remove_sparse_terms(once, 0.5)
    assert twice == once


def test_excluding_every_term_gives_zero_terms():
    corpus = CorpusBuilder.from_texts(["x", "y"])
    term_doc = remove_sparse_terms(build_matrix(corpus), 0)
    doc_term = remove_sparse_terms(build_matrix(corpus, DOCUMENT_TERM), 0)

    assert term_doc.shape == (0, 2)
    assert doc_term.shape == (2, 0)
    assert len(term_doc.term_index) == 0
    assert term_doc.n_docs == 2


def test_empty_matrix_prunes_to_itself():
    matrix = build_matrix(CorpusBuilder.from_texts([]))
    assert remove_sparse_terms(matrix, 0.5).shape == (0, 0)


@pytest.mark.parametrize("threshold", [1, 1.0, 1.5, -0.1, math.nan, True, "0.5", None])
def test_out_of_range_thresholds_are_rejected(prune_corpus, threshold):
    matrix = build_matrix(prune_corpus)
    with pytest.raises(ThresholdOutOfRangeError) as excinfo:
        remove_sparse_terms(matrix, threshold)
    assert excinfo.value.value is threshold


def test_reducer_records_timing(prune_corpus):
    profiler = Profiler()
    SparsityReducer(0.5, profiler=profiler).prune(build_matrix(prune_corpus))
    assert "Sparse Term Removal" in profiler.timings
