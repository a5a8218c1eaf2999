import pytest

from textmatrix import PipelineConfig, TextMatrixWorkflow, build_text_matrix
from textmatrix.corpus import CorpusBuilder
from textmatrix.errors import PipelineOrderWarning
from textmatrix.profiler import Profiler

REVIEWS = [
    "The soup was great, and the bread was great too!",
    "Great service. The soup arrived cold.",
    "Cold bread; slow service.",
    "The SOUP of the day: tomato.",
]


def cleaning_config(**overrides):
    options = dict(
        steps=("case_fold", "strip_punctuation", "remove_stopwords", "strip_whitespace"),
        stopwords_language=None,
        extra_stopwords=("the", "and", "was", "too", "of"),
    )
    options.update(overrides)
    return PipelineConfig(**options)


def test_run_exposes_every_stage():
    corpus = CorpusBuilder.from_texts(REVIEWS)
    result = TextMatrixWorkflow(cleaning_config(max_sparsity=0.5)).run(corpus)

    assert result.corpus.texts[0] == "soup great bread great"
    assert result.corpus.is_tokenized
    assert result.counts.get("great", 0) == 2
    assert result.counts.n_docs == 4
    # soup appears in 3 of 4 documents, service/cold/bread/great in 2
    assert result.matrix.terms == ("soup", "great", "bread", "service", "cold")
    assert corpus.texts == REVIEWS


def test_without_threshold_counts_are_returned_as_is():
    result = TextMatrixWorkflow(cleaning_config()).run(CorpusBuilder.from_texts(REVIEWS))
    assert result.matrix is result.counts
    assert "tomato" in result.matrix.term_index


def test_document_term_orientation():
    corpus = CorpusBuilder.from_texts(REVIEWS)
    term_doc = build_text_matrix(corpus, cleaning_config())
    doc_term = build_text_matrix(corpus, cleaning_config(orientation="document-term"))
    assert doc_term.shape == (term_doc.shape[1], term_doc.shape[0])
    assert doc_term.nonzero_entries() == term_doc.nonzero_entries()


def test_stem_completion_uses_the_corpus_before_stemming():
    corpus = CorpusBuilder.from_texts(["It was complicated.", "A complication arose", "complicatedly done"])
    config = PipelineConfig(
        steps=("case_fold", "strip_punctuation", "strip_whitespace", "stem_words", "complete_stems"),
        stopwords_language=None,
    )
    matrix = build_text_matrix(corpus, config)

    assert [matrix.get("complicated", doc_id) for doc_id in range(3)] == [1, 1, 1]
    assert "complication" not in matrix.term_index
    assert "complic" not in matrix.term_index


def test_order_warning_surfaces_from_workflow():
    config = PipelineConfig(steps=("strip_numbers", "expand_numbers"), stopwords_language=None)
    with pytest.warns(PipelineOrderWarning):
        matrix = build_text_matrix(CorpusBuilder.from_texts(["room 101", "3 cats"]), config)
    assert matrix.terms == ("room", "cats")


def test_parallel_mode_matches_standard():
    corpus = CorpusBuilder.from_texts(REVIEWS * 5, ids=[f"r{i}" for i in range(20)])
    standard = build_text_matrix(corpus, cleaning_config(processing_mode="standard"))
    parallel = build_text_matrix(corpus, cleaning_config(processing_mode="parallel"))
    assert parallel == standard


def test_profiler_sees_each_stage():
    profiler = Profiler()
    TextMatrixWorkflow(cleaning_config(max_sparsity=0.5), profiler).run(CorpusBuilder.from_texts(REVIEWS))

    assert "Step: case_fold" in profiler.timings
    assert "Tokenization" in profiler.timings
    assert "Matrix Assembly" in profiler.timings
    assert "Sparse Term Removal" in profiler.timings


def test_order_warning_is_issued_once_when_completing_from_the_corpus():
    config = PipelineConfig(steps=("strip_numbers", "expand_numbers", "stem_words", "complete_stems"),
                            stopwords_language=None)
    corpus = CorpusBuilder.from_texts(["room 101 complicated", "3 complications"])

    with pytest.warns(PipelineOrderWarning) as record:
        matrix = build_text_matrix(corpus, config)

    assert len([w for w in record if issubclass(w.category, PipelineOrderWarning)]) == 1
    assert matrix.get("complicated", 1) == 1
