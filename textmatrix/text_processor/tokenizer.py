# textmatrix/text_processor/tokenizer.py
"""
Tokenizers

A tokenizer turns one document string into an ordered sequence of tokens.
Tokenizers never emit empty tokens, and an empty string yields an empty
sequence. They are plain picklable objects so they can be shipped to worker
processes.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from textmatrix.errors import ConfigurationError


class BaseTokenizer(ABC):
    @abstractmethod
    def tokenize(self, text: str) -> List[str]: ...

    def __call__(self, text: str) -> List[str]:
        return self.tokenize(text)


class WhitespaceTokenizer(BaseTokenizer):
    """Splits on runs of whitespace."""

    def tokenize(self, text: str) -> List[str]:
        return text.split()

    def __repr__(self):
        return "WhitespaceTokenizer()"


class NGramTokenizer(BaseTokenizer):
    """
    Produces overlapping windows of consecutive tokens.

    With min_n < n every window size from min_n to n is emitted; for each
    starting position the shorter windows come first. Tokens inside a window
    are joined by a single space.

    Attributes:
        n (int): Largest window size
        min_n (int): Smallest window size (defaults to n)
        base (BaseTokenizer): Tokenizer producing the unigrams
    """
    def __init__(self, n: int, min_n: Optional[int] = None, base: Optional[BaseTokenizer] = None):
        min_n = n if min_n is None else min_n
        if min_n < 1 or n < min_n:
            raise ConfigurationError(f"Invalid n-gram range: min_n={min_n}, n={n}")
        self.n = n
        self.min_n = min_n
        self.base = base or WhitespaceTokenizer()

    def tokenize(self, text: str) -> List[str]:
        words = self.base.tokenize(text)
        grams = []
        for start in range(len(words)):
            for size in range(self.min_n, self.n + 1):
                if start + size > len(words):
                    break
                grams.append(" ".join(words[start:start + size]))
        return grams

    def __repr__(self):
        return f"NGramTokenizer(n={self.n}, min_n={self.min_n})"


class WordTokenizer(BaseTokenizer):
    """
    NLTK's Treebank-style word tokenizer, which also splits off punctuation.
    """
    def __init__(self, language: str = "english"):
        self.language = language
        ensure_punkt()

    def tokenize(self, text: str) -> List[str]:
        from nltk.tokenize import word_tokenize
        return [t for t in word_tokenize(text, language=self.language) if t]

    def __repr__(self):
        return f"WordTokenizer(language={self.language!r})"


def ensure_punkt():
    import nltk
    try:
        nltk.data.find('tokenizers/punkt')
    except LookupError:
        nltk.download('punkt', quiet=True)
        nltk.download('punkt_tab', quiet=True)


TOKENIZERS = {
    "whitespace": WhitespaceTokenizer,
    "ngram": NGramTokenizer,
    "word": WordTokenizer,
}


def create_tokenizer(kind: str = "whitespace", ngram_size: int = 1, min_ngram_size: Optional[int] = None) -> BaseTokenizer:
    """
    Create a tokenizer by name.

    Args:
        kind (str): 'whitespace', 'ngram' or 'word'
        ngram_size (int): Window size for 'ngram' (1 gives plain whitespace tokens)
        min_ngram_size (int, optional): Smallest window size for 'ngram'

    Returns:
        BaseTokenizer: The configured tokenizer
    """
    if kind not in TOKENIZERS:
        raise ConfigurationError(f"Unknown tokenizer {kind!r}; expected one of {sorted(TOKENIZERS)}")
    if kind == "ngram":
        return NGramTokenizer(ngram_size, min_ngram_size)
    return TOKENIZERS[kind]()
