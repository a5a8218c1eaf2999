import pandas as pd
import pytest

from textmatrix.corpus import Corpus, CorpusBuilder, Document
from textmatrix.errors import InputShapeError
from textmatrix.text_processor import WhitespaceTokenizer


def test_from_texts_keeps_input_order():
    corpus = CorpusBuilder.from_texts(["first", "second", "third"])
    assert corpus.ids == [0, 1, 2]
    assert corpus.texts == ["first", "second", "third"]
    assert corpus[1].raw_text == "second"
    assert not corpus.is_tokenized


def test_from_texts_with_external_ids():
    corpus = CorpusBuilder.from_texts(["x", "y"], ids=["doc-a", "doc-b"])
    assert corpus.ids == ["doc-a", "doc-b"]
    assert corpus.get("doc-b").text == "y"
    assert corpus.position_of("doc-b") == 1
    with pytest.raises(ValueError):
        CorpusBuilder.from_texts(["x", "y"], ids=["only-one"])


def test_non_string_element_fails_fast():
    with pytest.raises(InputShapeError) as excinfo:
        CorpusBuilder.from_texts(["fine", 42, "also fine"])
    assert excinfo.value.index == 1
    assert excinfo.value.column is None
    assert isinstance(excinfo.value, TypeError)


def test_single_string_is_not_split_into_characters():
    with pytest.raises(InputShapeError):
        CorpusBuilder.from_texts("hello")
    with pytest.raises(InputShapeError):
        CorpusBuilder.from_texts(b"hello")
    with pytest.raises(InputShapeError):
        CorpusBuilder.from_pairs("k1")


def test_from_pairs():
    corpus = CorpusBuilder.from_pairs([("k1", "alpha"), ("k2", "beta")])
    assert corpus.ids == ["k1", "k2"]
    assert corpus.texts == ["alpha", "beta"]

    with pytest.raises(InputShapeError) as excinfo:
        CorpusBuilder.from_pairs([("k1", "alpha"), "not a pair"])
    assert excinfo.value.index == 1


def test_from_table_joins_selected_columns():
    rows = [
        {"id": "r1", "title": "Hello", "body": "world", "stars": 5},
        {"id": "r2", "title": "Bye", "body": "now", "stars": 1},
    ]
    corpus = CorpusBuilder.from_table(rows, text_columns=["title", "body"], id_column="id")
    assert corpus.ids == ["r1", "r2"]
    assert corpus.texts == ["Hello world", "Bye now"]


def test_from_table_rejects_non_text_column():
    rows = [{"body": "text"}, {"body": 3.5}]
    with pytest.raises(InputShapeError) as excinfo:
        CorpusBuilder.from_table(rows, text_columns=["body"])
    assert excinfo.value.index == 1
    assert excinfo.value.column == "body"


def test_from_table_missing_column():
    with pytest.raises(InputShapeError) as excinfo:
        CorpusBuilder.from_table([{"body": "text"}], text_columns=["title"])
    assert excinfo.value.index == 0
    assert excinfo.value.column == "title"


def test_from_table_missing_id_column():
    rows = [{"key": "a", "body": "text"}, {"body": "more text"}]
    with pytest.raises(InputShapeError) as excinfo:
        CorpusBuilder.from_table(rows, text_columns=["body"], id_column="key")
    assert excinfo.value.index == 1
    assert excinfo.value.column == "key"


def test_from_dataframe():
    frame = pd.DataFrame({"key": ["a", "b"], "review": ["good food", "slow service"], "score": [4, 2]})
    corpus = CorpusBuilder.from_table(frame, text_columns="review", id_column="key")
    assert corpus.ids == ["a", "b"]
    assert corpus.texts == ["good food", "slow service"]

    with pytest.raises(InputShapeError) as excinfo:
        CorpusBuilder.from_table(frame, text_columns=["review", "score"])
    assert excinfo.value.column == "score"


def test_from_directory_reads_txt_files_in_name_order(tmp_path):
    (tmp_path / "b.txt").write_text("second file", encoding="utf-8")
    (tmp_path / "a.txt").write_text("first file", encoding="utf-8")
    (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")

    corpus = CorpusBuilder.from_directory(str(tmp_path))
    assert corpus.ids == ["a.txt", "b.txt"]
    assert corpus.texts == ["first file", "second file"]


def test_from_lines_skips_blank_lines(tmp_path):
    path = tmp_path / "docs.txt"
    path.write_text("one\n\ntwo\n", encoding="utf-8")
    corpus = CorpusBuilder.from_lines(str(path))
    assert corpus.texts == ["one", "two"]
    assert corpus.ids == [0, 1]


def test_from_lines_tolerates_invalid_utf8(tmp_path):
    path = tmp_path / "docs.txt"
    path.write_bytes(b"caf\xe9 au lait\nplain line\n")
    corpus = CorpusBuilder.from_lines(str(path))
    assert corpus.texts == ["caf au lait", "plain line"]


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError):
        Corpus([Document.from_text("x", "a"), Document.from_text("x", "b")])


def test_transformations_return_new_corpus():
    corpus = CorpusBuilder.from_texts(["Mixed Case"])
    lowered = corpus.map_text(str.lower)
    assert lowered.texts == ["mixed case"]
    assert corpus.texts == ["Mixed Case"]
    assert lowered[0].raw_text == "Mixed Case"


def test_tokens_follow_the_text():
    corpus = CorpusBuilder.from_texts(["a b", "c"]).tokenize(WhitespaceTokenizer())
    assert corpus.token_lists() == [("a", "b"), ("c",)]

    retexted = corpus.with_texts(["d", "e f"])
    assert not retexted.is_tokenized
    with pytest.raises(ValueError):
        retexted.token_lists()


def test_slicing_returns_a_corpus():
    corpus = CorpusBuilder.from_texts(["a", "b", "c"])
    head = corpus[:2]
    assert isinstance(head, Corpus)
    assert head.ids == [0, 1]
