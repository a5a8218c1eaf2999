import pickle

import pytest

from textmatrix.errors import ConfigurationError
from textmatrix.stemming import CompletionDictionary, StemCompleter, Stemmer, complete
from textmatrix.text_processor import CompleteStems, StemWords, normalize_text

WORDS = ["complicated", "complication", "complicatedly"]


def test_related_words_share_a_stem():
    stems = {Stemmer().stem(word) for word in WORDS}
    assert stems == {"complic"}


@pytest.mark.parametrize("word", WORDS)
def test_stem_completes_to_dictionary_word(word):
    result = complete(Stemmer().stem(word), {"complicate"})
    assert result.word == "complicate"
    assert result.matched
    assert result.candidates == ("complicate",)


def test_missing_stem_is_returned_unchanged():
    result = complete("xyz", ["complicate"])
    assert result.word == "xyz"
    assert not result.matched
    assert result.candidates == ()


def test_multi_word_string_is_not_stemmed():
    stemmer = Stemmer()
    assert stemmer.stem("running dogs") == "running dogs"
    assert stemmer.stem("") == ""
    assert stemmer.stem_tokens("running dogs".split()) == ["run", "dog"]


def test_completion_policies():
    dictionary = CompletionDictionary(["complicated", "complicate", "complication", "complication"])

    def chosen(policy):
        return StemCompleter(dictionary, policy=policy).complete("complic")

    assert chosen("first").word == "complicated"
    assert chosen("prevalent").word == "complication"
    assert chosen("longest").word == "complication"
    assert chosen("shortest").word == "complicate"
    assert chosen("first").candidates == ("complicated", "complicate", "complication")
    assert chosen("first").ambiguous


def test_unknown_policy_and_algorithm():
    with pytest.raises(ConfigurationError):
        StemCompleter(["word"], policy="random")
    with pytest.raises(ConfigurationError):
        Stemmer("lovins")
    with pytest.raises(ConfigurationError):
        Stemmer("snowball", language="klingon")


def test_dictionary_keeps_insertion_order_and_counts():
    dictionary = CompletionDictionary(["b", "a", "b", "c"])
    assert dictionary.words == ["b", "a", "c"]
    assert dictionary.count("b") == 2
    assert dictionary.count("z") == 0
    assert "a" in dictionary


def test_dictionary_from_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("complicate simple\nsimple\n", encoding="utf-8")
    dictionary = CompletionDictionary.from_file(str(path))
    assert dictionary.words == ["complicate", "simple"]
    assert dictionary.count("simple") == 2


def test_stem_and_complete_steps():
    completer = StemCompleter(["complicate", "running"])
    text = normalize_text("complicated complication running dogs",
                          [StemWords(), CompleteStems(completer)])
    assert text == "complicate complicate running dog"


def test_stemmer_and_completer_pickle():
    stemmer = pickle.loads(pickle.dumps(Stemmer("porter")))
    assert stemmer.algorithm == "porter"
    assert stemmer.stem("running") == "run"

    completer = pickle.loads(pickle.dumps(StemCompleter(["complicate"], policy="shortest")))
    assert completer.policy == "shortest"
    assert completer.complete("complic").word == "complicate"
