from textmatrix.stemming.stemmer import ALGORITHMS, Stemmer
from textmatrix.stemming.completion import (POLICIES, CompletionDictionary, CompletionResult,
                                            StemCompleter, complete)

__all__ = [
    'ALGORITHMS',
    'POLICIES',
    'Stemmer',
    'CompletionDictionary',
    'CompletionResult',
    'StemCompleter',
    'complete'
]
