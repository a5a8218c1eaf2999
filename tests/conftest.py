import pytest

from textmatrix.corpus import CorpusBuilder
from textmatrix.text_processor.stopwords import StopwordSet


@pytest.fixture
def stopwords():
    # Built explicitly so no stopword corpus has to be downloaded
    return StopwordSet({"the", "a", "an", "of", "and", "is", "at", "up", "it"}, language="english")


@pytest.fixture
def fruit_corpus():
    return CorpusBuilder.from_texts([
        "apple banana apple",
        "banana cherry",
        "",
    ])


@pytest.fixture
def prune_corpus():
    # Document frequencies: a=3, b=2, c=1
    return CorpusBuilder.from_texts(["a b c", "a b", "a"])
