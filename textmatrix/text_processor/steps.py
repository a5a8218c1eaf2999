# textmatrix/text_processor/steps.py
"""
Normalization Steps

Each step is a pure text transformation tagged with a StepKind. Steps are
composed into a Pipeline by the caller; the order in which they run is
exactly the order in which they were given.

Steps are plain picklable objects (no closures) so a pipeline can be shipped
to worker processes unchanged.
"""
import re
import string
import unicodedata
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, FrozenSet, Mapping, Optional

from textmatrix.errors import ConfigurationError
from textmatrix.stemming import Stemmer
from textmatrix.text_processor.expansions import (DEFAULT_ABBREVIATIONS, DEFAULT_CONTRACTIONS,
                                                  DEFAULT_SYMBOLS, NUMBER_PATTERN, Replacer,
                                                  merge_tables, number_to_words)
from textmatrix.text_processor.stopwords import StopwordSet

_WORD_CHAR = re.compile(r"\w")


class StepKind(Enum):
    CASE_FOLD = "case_fold"
    STRIP_PUNCTUATION = "strip_punctuation"
    STRIP_NUMBERS = "strip_numbers"
    STRIP_WHITESPACE = "strip_whitespace"
    EXPAND_ABBREVIATION = "expand_abbreviations"
    EXPAND_CONTRACTION = "expand_contractions"
    EXPAND_SYMBOL = "expand_symbols"
    EXPAND_NUMBER = "expand_numbers"
    REMOVE_STOPWORDS = "remove_stopwords"
    STEM = "stem_words"
    COMPLETE_STEMS = "complete_stems"
    CUSTOM = "custom"


class NormalizationStep(ABC):
    """
    Base class for pipeline steps.

    Class Attributes:
        kind (StepKind): Tag identifying the transformation
        blocked_by (frozenset): Kinds of earlier steps that remove this
                                step's input when they run first
    """
    kind: StepKind = StepKind.CUSTOM
    blocked_by: FrozenSet[StepKind] = frozenset()

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def transform(self, text: str) -> str: ...

    def __call__(self, text: str) -> str:
        return self.transform(text)

    def apply(self, corpus):
        """Apply this step to every document, returning a new Corpus."""
        return corpus.map_text(self.transform)

    def __repr__(self):
        return f"{type(self).__name__}()"


class CaseFold(NormalizationStep):
    """
    Lowercase alphabetic characters.

    mode='ascii' maps only A-Z; mode='unicode' applies full Unicode case folding.
    """
    kind = StepKind.CASE_FOLD
    _ASCII_TABLE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

    def __init__(self, mode: str = "ascii"):
        if mode not in ("ascii", "unicode"):
            raise ConfigurationError(f"Unknown case-fold mode {mode!r}")
        self.mode = mode

    def transform(self, text: str) -> str:
        if self.mode == "unicode":
            return text.casefold()
        return text.translate(self._ASCII_TABLE)

    def __repr__(self):
        return f"CaseFold(mode={self.mode!r})"


class StripPunctuation(NormalizationStep):
    """
    Remove punctuation characters. Letters, digits and whitespace are never
    touched, and no whitespace is collapsed.

    Attributes:
        punctuation (str): Characters to remove (ASCII punctuation by default)
        unicode (bool): Also remove every Unicode punctuation (P*) character
        preserve_intra_word_contractions (bool): Keep apostrophes between word characters
        preserve_intra_word_dashes (bool): Keep hyphens between word characters
    """
    kind = StepKind.STRIP_PUNCTUATION

    def __init__(self, punctuation: Optional[str] = None, unicode: bool = False,
                 preserve_intra_word_contractions: bool = False,
                 preserve_intra_word_dashes: bool = False):
        punctuation = string.punctuation if punctuation is None else punctuation
        offending = [ch for ch in punctuation if ch.isalnum() or ch.isspace()]
        if offending:
            raise ConfigurationError(f"Punctuation set may not contain letters, digits or whitespace: {offending}")
        self.punctuation = punctuation
        self.unicode = unicode
        self.preserve_intra_word_contractions = preserve_intra_word_contractions
        self.preserve_intra_word_dashes = preserve_intra_word_dashes
        self._table = str.maketrans("", "", punctuation)

    def _is_removed(self, ch: str) -> bool:
        return ch in self.punctuation or unicodedata.category(ch).startswith("P")

    def _is_protected(self, text: str, i: int) -> bool:
        ch = text[i]
        if not ((ch == "'" and self.preserve_intra_word_contractions)
                or (ch == "-" and self.preserve_intra_word_dashes)):
            return False
        return 0 < i < len(text) - 1 and bool(_WORD_CHAR.match(text[i - 1]) and _WORD_CHAR.match(text[i + 1]))

    def transform(self, text: str) -> str:
        if not (self.preserve_intra_word_contractions or self.preserve_intra_word_dashes):
            if self.unicode:
                return "".join(ch for ch in text if not self._is_removed(ch))
            return text.translate(self._table)

        is_removed = self._is_removed if self.unicode else (lambda ch: ch in self.punctuation)
        return "".join(ch for i, ch in enumerate(text)
                       if not is_removed(ch) or self._is_protected(text, i))

    def __repr__(self):
        return (f"StripPunctuation(unicode={self.unicode}, "
                f"preserve_intra_word_contractions={self.preserve_intra_word_contractions}, "
                f"preserve_intra_word_dashes={self.preserve_intra_word_dashes})")


class StripNumbers(NormalizationStep):
    """
    Remove digit runs.

    mode='substring' removes every maximal digit run, including ones embedded
    in alphanumeric tokens ('abc123' -> 'abc'); mode='whole_token' removes only
    tokens made entirely of digits.
    """
    kind = StepKind.STRIP_NUMBERS
    PATTERNS = {
        "substring": re.compile(r"\d+"),
        "whole_token": re.compile(r"(?<!\S)\d+(?!\S)"),
    }

    def __init__(self, mode: str = "substring"):
        if mode not in self.PATTERNS:
            raise ConfigurationError(f"Unknown number-removal mode {mode!r}; expected one of {sorted(self.PATTERNS)}")
        self.mode = mode

    def transform(self, text: str) -> str:
        return self.PATTERNS[self.mode].sub("", text)

    def __repr__(self):
        return f"StripNumbers(mode={self.mode!r})"


class StripWhitespace(NormalizationStep):
    """Collapse whitespace runs to a single space and trim both ends."""
    kind = StepKind.STRIP_WHITESPACE
    _PATTERN = re.compile(r"\s+")

    def transform(self, text: str) -> str:
        return self._PATTERN.sub(" ", text).strip()


class _TableExpansion(NormalizationStep):
    default_table: Mapping[str, str] = {}
    pad = False

    def __init__(self, table: Optional[Mapping[str, str]] = None, ignore_case: bool = True):
        self.replacer = Replacer(merge_tables(self.default_table, table), ignore_case=ignore_case, pad=self.pad)

    @property
    def table(self):
        return self.replacer.table

    def transform(self, text: str) -> str:
        return self.replacer.replace(text)

    def __repr__(self):
        return f"{type(self).__name__}(entries={len(self.table)}, ignore_case={self.replacer.ignore_case})"


class ExpandAbbreviations(_TableExpansion):
    kind = StepKind.EXPAND_ABBREVIATION
    blocked_by = frozenset({StepKind.STRIP_PUNCTUATION})
    default_table = DEFAULT_ABBREVIATIONS


class ExpandContractions(_TableExpansion):
    kind = StepKind.EXPAND_CONTRACTION
    blocked_by = frozenset({StepKind.STRIP_PUNCTUATION})
    default_table = DEFAULT_CONTRACTIONS


class ExpandSymbols(_TableExpansion):
    """Symbol expansions are padded with spaces ('50%' -> '50 percent ')."""
    kind = StepKind.EXPAND_SYMBOL
    blocked_by = frozenset({StepKind.STRIP_PUNCTUATION})
    default_table = DEFAULT_SYMBOLS
    pad = True


class ExpandNumbers(NormalizationStep):
    """Spell digit runs out as words ('6' -> 'six', '1,250' -> 'one thousand two hundred fifty')."""
    kind = StepKind.EXPAND_NUMBER
    blocked_by = frozenset({StepKind.STRIP_NUMBERS})

    def transform(self, text: str) -> str:
        return NUMBER_PATTERN.sub(lambda m: number_to_words(m.group(0)), text)


class RemoveStopwords(NormalizationStep):
    """
    Drop whitespace-delimited tokens that exactly match a stopword.

    Matching is case-sensitive, so case folding normally runs first. The
    surviving tokens keep their relative order and are joined by single spaces.
    """
    kind = StepKind.REMOVE_STOPWORDS

    def __init__(self, stopwords):
        if not isinstance(stopwords, StopwordSet):
            stopwords = StopwordSet(stopwords)
        self.stopwords = stopwords

    def transform(self, text: str) -> str:
        return " ".join(t for t in text.split() if t not in self.stopwords)

    def __repr__(self):
        return f"RemoveStopwords({self.stopwords!r})"


class StemWords(NormalizationStep):
    """Stem each whitespace-delimited token of the text."""
    kind = StepKind.STEM

    def __init__(self, stemmer=None):
        self.stemmer = stemmer or Stemmer()

    def transform(self, text: str) -> str:
        return " ".join(self.stemmer.stem_tokens(text.split()))

    def __repr__(self):
        return f"StemWords({self.stemmer!r})"


class CompleteStems(NormalizationStep):
    """
    Replace each stemmed token with its dictionary completion. Tokens without
    a completion are left as they are.
    """
    kind = StepKind.COMPLETE_STEMS
    blocked_by = frozenset()

    def __init__(self, completer):
        self.completer = completer

    def transform(self, text: str) -> str:
        return " ".join(self.completer.complete(t).word for t in text.split())

    def __repr__(self):
        return f"CompleteStems({self.completer!r})"


class CustomStep(NormalizationStep):
    """
    Wrap a caller-supplied str -> str function. For parallel processing the
    function must be picklable (a module-level function).
    """
    kind = StepKind.CUSTOM

    def __init__(self, func: Callable[[str], str], name: Optional[str] = None):
        if not callable(func):
            raise ConfigurationError(f"Custom step requires a callable, got {type(func).__name__}")
        self.func = func
        self._name = name or getattr(func, "__name__", "custom")

    @property
    def name(self) -> str:
        return self._name

    def transform(self, text: str) -> str:
        result = self.func(text)
        if not isinstance(result, str):
            raise TypeError(f"Custom step {self._name!r} returned {type(result).__name__}, expected str")
        return result

    def __repr__(self):
        return f"CustomStep(name={self._name!r})"


def as_step(step) -> NormalizationStep:
    """Accept a step object or a plain callable."""
    if isinstance(step, NormalizationStep):
        return step
    if callable(step):
        return CustomStep(step)
    raise ConfigurationError(f"Not a normalization step: {step!r}")

