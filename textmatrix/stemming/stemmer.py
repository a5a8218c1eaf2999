# textmatrix/stemming/stemmer.py
"""
Stemmer

Wraps an NLTK stemming algorithm behind a single-token contract. Stemming is
deterministic and only meaningful on single words: a string containing
whitespace is returned unchanged instead of having only its last word's
suffix stripped.
"""
from typing import Iterable, List

from textmatrix.errors import ConfigurationError

ALGORITHMS = ("snowball", "porter", "lancaster")


class Stemmer:
    """
    Attributes:
        algorithm (str): 'snowball' (Porter2), 'porter' or 'lancaster'
        language (str): Language for the snowball algorithm
    """
    def __init__(self, algorithm: str = "snowball", language: str = "english"):
        if algorithm not in ALGORITHMS:
            raise ConfigurationError(f"Unknown stemming algorithm {algorithm!r}; expected one of {ALGORITHMS}")
        self.algorithm = algorithm
        self.language = language
        self._stemmer = self._create(algorithm, language)

    @staticmethod
    def _create(algorithm, language):
        from nltk.stem import LancasterStemmer, PorterStemmer, SnowballStemmer
        if algorithm == "snowball":
            if language not in SnowballStemmer.languages:
                raise ConfigurationError(f"Snowball has no stemmer for {language!r}")
            return SnowballStemmer(language)
        if algorithm == "porter":
            return PorterStemmer()
        return LancasterStemmer()

    def stem(self, token: str) -> str:
        if not token or any(ch.isspace() for ch in token):
            return token
        return self._stemmer.stem(token)

    def stem_tokens(self, tokens: Iterable[str]) -> List[str]:
        return [self.stem(t) for t in tokens]

    def __call__(self, token: str) -> str:
        return self.stem(token)

    def __getstate__(self):
        return {"algorithm": self.algorithm, "language": self.language}

    def __setstate__(self, state):
        self.__init__(state["algorithm"], state["language"])

    def __repr__(self):
        return f"Stemmer(algorithm={self.algorithm!r}, language={self.language!r})"
