import string
import warnings

import pytest

from textmatrix.corpus import CorpusBuilder
from textmatrix.errors import ConfigurationError, PipelineOrderWarning
from textmatrix.text_processor import (CaseFold, CustomStep, ExpandAbbreviations, ExpandContractions,
                                       ExpandNumbers, ExpandSymbols, ParallelTextProcessor, Pipeline,
                                       RemoveStopwords, StandardTextProcessor, StripNumbers, StripPunctuation,
                                       StripWhitespace, TextProcessorFactory, apply_pipeline, normalize_text)


def test_markup_example_is_fully_cleaned():
    result = normalize_text("<b>She</b> woke up at       6 A.M.",
                            [CaseFold(), StripPunctuation(), StripWhitespace()])

    assert not any(ch.isupper() for ch in result)
    assert not any(ch in string.punctuation for ch in result)
    assert "  " not in result
    assert result == "bsheb woke up at 6 am"


def test_apply_preserves_order_and_leaves_input_untouched():
    corpus = CorpusBuilder.from_texts(["First DOC", "Second DOC", "Third DOC"])
    result = apply_pipeline(corpus, [CaseFold()])

    assert result.texts == ["first doc", "second doc", "third doc"]
    assert result.ids == [0, 1, 2]
    assert corpus.texts == ["First DOC", "Second DOC", "Third DOC"]
    assert [doc.raw_text for doc in result] == corpus.texts


def test_number_removal_before_expansion_is_a_reported_no_op():
    corpus = CorpusBuilder.from_texts(["I have 6 cats", "and 12 dogs"])
    pipeline = Pipeline([StripNumbers(), ExpandNumbers()])

    with pytest.warns(PipelineOrderWarning, match="expand_numbers"):
        result = pipeline.apply(corpus)

    assert not any(ch.isdigit() for text in result.texts for ch in text)
    assert result.texts == ["I have  cats", "and  dogs"]


def test_number_expansion_before_removal_spells_digits_out():
    corpus = CorpusBuilder.from_texts(["I have 6 cats", "and 12 dogs"])

    with warnings.catch_warnings():
        warnings.simplefilter("error", PipelineOrderWarning)
        result = Pipeline([ExpandNumbers(), StripNumbers()]).apply(corpus)

    assert result.texts == ["I have six cats", "and twelve dogs"]


def test_no_op_without_blocking_step_is_not_warned():
    corpus = CorpusBuilder.from_texts(["no digits here"])
    with warnings.catch_warnings():
        warnings.simplefilter("error", PipelineOrderWarning)
        result = Pipeline([CaseFold(), StripNumbers()]).apply(corpus)
    assert result.texts == ["no digits here"]


def test_diagnose_returns_messages():
    pipeline = Pipeline([StripPunctuation(), ExpandSymbols()])
    with pytest.warns(PipelineOrderWarning):
        messages = pipeline.diagnose([True, False], doc_count=3)
    assert len(messages) == 1
    assert "strip_punctuation" in messages[0]


def test_stopword_removal_is_a_set_difference(stopwords):
    text = "the cat sat at the edge of a mat and it purred"
    result = RemoveStopwords(stopwords).transform(text)

    assert result == "cat sat edge mat purred"
    assert not set(result.split()) & set(stopwords)
    kept = [t for t in text.split() if t not in stopwords]
    assert result.split() == kept


def test_stopword_matching_is_case_sensitive(stopwords):
    assert RemoveStopwords(stopwords).transform("The cat") == "The cat"


def test_symbol_expansion_prefers_longest_match():
    steps = [ExpandSymbols(), StripWhitespace()]
    assert normalize_text("coffee w/o sugar", steps) == "coffee without sugar"
    assert normalize_text("tea w/ milk", steps) == "tea with milk"
    assert normalize_text("50% off", steps) == "50 percent off"


def test_contraction_and_abbreviation_expansion():
    assert ExpandContractions().transform("I can't, she won't") == "I cannot, she will not"
    assert ExpandContractions().transform("Don't") == "do not"
    assert ExpandAbbreviations().transform("Dr. Smith at 6 A.M.") == "Doctor Smith at 6 AM"


def test_custom_expansion_table_replaces_defaults():
    step = ExpandAbbreviations({"approx.": "approximately"})
    assert step.transform("approx. Dr. Smith") == "approximately Dr. Smith"


def test_case_sensitive_expansion():
    step = ExpandAbbreviations({"US": "united states"}, ignore_case=False)
    assert step.transform("US and us") == "united states and us"


def test_expansion_after_punctuation_removal_warns():
    corpus = CorpusBuilder.from_texts(["I can't"])
    with pytest.warns(PipelineOrderWarning, match="expand_contractions"):
        result = Pipeline([StripPunctuation(), ExpandContractions()]).apply(corpus)
    assert result.texts == ["I cant"]


def test_punctuation_options():
    assert StripPunctuation().transform("don't 'quote'") == "dont quote"
    assert StripPunctuation(preserve_intra_word_contractions=True).transform("don't 'quote'") == "don't quote"
    assert (StripPunctuation(preserve_intra_word_dashes=True).transform("state-of-the-art -- done")
            == "state-of-the-art  done")
    assert StripPunctuation(unicode=True).transform("«hello» — world…") == "hello  world"
    assert StripPunctuation(punctuation="!").transform("hi! there.") == "hi there."


def test_punctuation_removal_keeps_letters_digits_and_spacing():
    assert StripPunctuation().transform("a1,  b2.") == "a1  b2"
    with pytest.raises(ConfigurationError):
        StripPunctuation(punctuation="a.")


def test_number_removal_modes():
    assert StripNumbers().transform("abc123 456 7x") == "abc  x"
    assert StripNumbers("whole_token").transform("abc123 456 7x") == "abc123  7x"
    with pytest.raises(ConfigurationError):
        StripNumbers("digits")


def test_case_fold_modes():
    assert CaseFold().transform("ÉCOLE") == "École"
    assert CaseFold("unicode").transform("STRASSE Straße") == "strasse strasse"


def test_number_expansion():
    assert (ExpandNumbers().transform("1,250 apples and 3.14")
            == "one thousand two hundred fifty apples and three point one four")
    assert ExpandNumbers().transform("room 101") == "room one hundred one"


def test_number_expansion_leaves_digits_attached_to_letters():
    assert ExpandNumbers().transform("abc123 6am covid19") == "abc123 6am covid19"
    assert ExpandNumbers().transform("(7) #3, 2.5.") == "(seven) #three, two point five."

    pipeline = Pipeline([StripNumbers("whole_token"), ExpandNumbers()])
    assert normalize_text("abc123 7", pipeline) == "abc123 "


def test_protected_punctuation_does_not_invent_characters():
    step = StripPunctuation(preserve_intra_word_contractions=True, preserve_intra_word_dashes=True)
    assert step.transform("a\x02b a\x01b") == "a\x02b a\x01b"
    assert step.transform("don't well-known -x- 'quoted'") == "don't well-known x quoted"


def test_whitespace_collapse():
    assert StripWhitespace().transform("  a \t\n b   c ") == "a b c"


def test_trace_keeps_every_stage():
    corpus = CorpusBuilder.from_texts(["Hello, World"])
    stages = Pipeline([CaseFold(), StripPunctuation()]).trace(corpus)

    assert [name for name, _ in stages] == ["case_fold", "strip_punctuation"]
    assert stages[0][1].texts == ["hello, world"]
    assert stages[1][1].texts == ["hello world"]


def test_callables_become_custom_steps():
    pipeline = Pipeline([str.upper])
    assert pipeline.names == ["upper"]
    assert normalize_text("abc", pipeline) == "ABC"
    assert pipeline.then(CaseFold()).names == ["upper", "case_fold"]


def test_custom_step_must_return_text():
    step = CustomStep(lambda text: len(text), name="length")
    with pytest.raises(TypeError):
        step.transform("abc")


def test_standard_processor_tokenizes(stopwords):
    corpus = CorpusBuilder.from_texts(["The Cat, the HAT.", ""])
    pipeline = Pipeline([CaseFold(), StripPunctuation(), RemoveStopwords(stopwords), StripWhitespace()])
    result = StandardTextProcessor(pipeline).process(corpus)

    assert result.texts == ["cat hat", ""]
    assert result.token_lists() == [("cat", "hat"), ()]


def test_parallel_processor_matches_standard(stopwords):
    texts = [f"Document {i}: the quick, brown fox #{i % 7} jumps" for i in range(40)]
    corpus = CorpusBuilder.from_texts(texts)
    pipeline = Pipeline([CaseFold(), ExpandNumbers(), StripPunctuation(),
                         RemoveStopwords(stopwords), StripWhitespace()])

    standard = StandardTextProcessor(pipeline).process(corpus)
    parallel = ParallelTextProcessor(pipeline, num_workers=2, batch_size=6).process(corpus)

    assert parallel == standard
    assert parallel.ids == list(range(40))


def test_parallel_processor_reports_order_warnings():
    corpus = CorpusBuilder.from_texts([f"item {i}" for i in range(12)])
    processor = ParallelTextProcessor([StripNumbers(), ExpandNumbers()], num_workers=2, batch_size=3)

    with pytest.warns(PipelineOrderWarning):
        result = processor.process(corpus)
    assert all(text == "item " for text in result.texts)


def test_processor_factory_selects_by_size():
    small = TextProcessorFactory.create_processor(Pipeline(), mode="auto", doc_count=10)
    assert type(small) is StandardTextProcessor
    forced = TextProcessorFactory.create_processor(Pipeline(), mode="parallel")
    assert isinstance(forced, ParallelTextProcessor)
    with pytest.raises(ConfigurationError):
        TextProcessorFactory.create_processor(Pipeline(), mode="threads")
