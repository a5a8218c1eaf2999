import dataclasses

import pytest

from textmatrix.config import PipelineConfig
from textmatrix.errors import ConfigurationError, ThresholdOutOfRangeError
from textmatrix.text_processor import (CaseFold, ExpandNumbers, RemoveStopwords, StripNumbers, StripPunctuation,
                                       normalize_text)
from textmatrix.utils import DEFAULT_CONFIG


def test_steps_are_built_in_the_given_order():
    config = PipelineConfig(steps=("strip_numbers", "case_fold", "expand_numbers"))
    steps = config.build_steps()

    assert [type(s) for s in steps] == [StripNumbers, CaseFold, ExpandNumbers]
    assert config.build_pipeline().names == ["strip_numbers", "case_fold", "expand_numbers"]


def test_step_options_are_passed_through():
    config = PipelineConfig(steps=("strip_punctuation",), preserve_intra_word_dashes=True,
                            number_removal="whole_token")
    step = config.build_steps()[0]
    assert isinstance(step, StripPunctuation)
    assert step.preserve_intra_word_dashes
    assert config.build_step("strip_numbers").mode == "whole_token"


def test_explicit_stopwords_without_language_list():
    config = PipelineConfig(steps=("remove_stopwords",), stopwords_language=None, extra_stopwords=("foo",))
    step = config.build_steps()[0]
    assert isinstance(step, RemoveStopwords)
    assert set(step.stopwords) == {"foo"}


def test_stopwords_file(tmp_path):
    path = tmp_path / "stop.txt"
    path.write_text("alpha\nBeta\n\n", encoding="utf-8")
    config = PipelineConfig(stopwords_file=str(path), extra_stopwords=("gamma",))
    assert set(config.build_stopwords()) == {"alpha", "beta", "gamma"}


def test_expansion_table_overrides():
    config = PipelineConfig.from_dict({"steps": ["expand_abbreviations"],
                                       "abbreviations": {"approx.": "approximately"}})
    assert normalize_text("approx. Dr.", config.build_pipeline()) == "approximately Dr."


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError):
        PipelineConfig.from_dict({"steps": ["case_fold"], "stemming": "porter"})


def test_from_dict_accepts_the_default_file_config():
    config = PipelineConfig.from_dict(DEFAULT_CONFIG)
    assert list(config.steps) == DEFAULT_CONFIG["steps"]
    assert config.max_sparsity is None


def test_invalid_values_are_rejected():
    with pytest.raises(ConfigurationError):
        PipelineConfig(steps=("case_fold", "lemmatize"))
    with pytest.raises(ConfigurationError):
        PipelineConfig(stemmer="lovins")
    with pytest.raises(ConfigurationError):
        PipelineConfig(orientation="sideways")
    with pytest.raises(ConfigurationError):
        PipelineConfig(completion_policy="random")
    with pytest.raises(ThresholdOutOfRangeError):
        PipelineConfig(max_sparsity=1.0)


def test_config_is_immutable():
    config = PipelineConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.max_sparsity = 0.5


def test_completion_needs_a_dictionary():
    config = PipelineConfig(steps=("stem_words", "complete_stems"))
    with pytest.raises(ConfigurationError):
        config.build_pipeline()


def test_completion_dictionary_file(tmp_path):
    path = tmp_path / "dictionary.txt"
    path.write_text("complicate\n", encoding="utf-8")
    config = PipelineConfig(steps=("stem_words", "complete_stems"), completion_dictionary_file=str(path))
    assert normalize_text("complicated complication", config.build_pipeline()) == "complicate complicate"


def test_dict_round_trip():
    config = PipelineConfig(steps=("case_fold",), symbols={"&": "and"}, bounds=(1, 5), max_sparsity=0.8)
    assert PipelineConfig.from_dict(config.to_dict()) == config
