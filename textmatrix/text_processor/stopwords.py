# textmatrix/text_processor/stopwords.py
"""
Stopword Sets

A StopwordSet is an immutable, language-tagged set of strings: a base list
(NLTK's stopword corpus for the language, a file, or nothing) united with
caller-supplied extensions.
"""
from typing import FrozenSet, Iterable, Optional


def load_language_stopwords(language: str) -> FrozenSet[str]:
    """Load NLTK's stopword list for a language, downloading it if needed."""
    import nltk
    try:
        nltk.data.find('corpora/stopwords')
    except LookupError:
        nltk.download('stopwords', quiet=True)
    from nltk.corpus import stopwords
    return frozenset(stopwords.words(language))


def load_stopwords_file(filepath: str) -> FrozenSet[str]:
    """Read one stopword per line, ignoring blank lines."""
    with open(filepath, encoding="utf-8") as file:
        return frozenset(line.strip().lower() for line in file if line.strip())


class StopwordSet:
    """
    Immutable set of stopwords.

    Attributes:
        language (str, optional): Tag of the base list
        words (frozenset): Base list united with the extensions
    """
    __slots__ = ("language", "words")

    def __init__(self, words: Iterable[str] = (), language: Optional[str] = None):
        object.__setattr__(self, "language", language)
        object.__setattr__(self, "words", frozenset(words))

    def __setattr__(self, name, value):
        raise AttributeError("StopwordSet is immutable")

    def __reduce__(self):
        return (StopwordSet, (self.words, self.language))

    @classmethod
    def for_language(cls, language: str = "english", extra: Iterable[str] = ()) -> "StopwordSet":
        return cls(load_language_stopwords(language) | frozenset(extra), language=language)

    @classmethod
    def from_file(cls, filepath: str, extra: Iterable[str] = (), language: Optional[str] = None) -> "StopwordSet":
        return cls(load_stopwords_file(filepath) | frozenset(extra), language=language)

    def extend(self, extra: Iterable[str]) -> "StopwordSet":
        """Return a new set holding these words plus the extensions."""
        return StopwordSet(self.words | frozenset(extra), language=self.language)

    def __contains__(self, token) -> bool:
        return token in self.words

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(sorted(self.words))

    def __eq__(self, other):
        if not isinstance(other, StopwordSet):
            return NotImplemented
        return self.words == other.words and self.language == other.language

    def __hash__(self):
        return hash((self.words, self.language))

    def __repr__(self):
        return f"StopwordSet(language={self.language!r}, size={len(self.words)})"
