# textmatrix/stemming/completion.py
"""
Stem Completion

Maps stems back to full words using a reference vocabulary. A dictionary
word is a candidate for a stem when stemming it gives exactly that stem.
Candidates are kept in dictionary insertion order, and every result exposes
the whole candidate tuple so callers can override the chosen word.

Policies:
    first      -- the earliest candidate in insertion order (default)
    prevalent  -- the candidate seen most often, ties by insertion order
    longest    -- the longest candidate, ties by insertion order
    shortest   -- the shortest candidate, ties by insertion order

A stem with no candidate is returned unchanged with matched=False.
"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from textmatrix.errors import ConfigurationError
from textmatrix.stemming.stemmer import Stemmer

POLICIES = ("first", "prevalent", "longest", "shortest")


@dataclass(frozen=True)
class CompletionResult:
    """
    Attributes:
        stem (str): The stem that was looked up
        word (str): The chosen completion, or the stem itself on a miss
        candidates (tuple): Every dictionary word sharing the stem, in insertion order
    """
    stem: str
    word: str
    candidates: Tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        return bool(self.candidates)

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1


class CompletionDictionary:
    """
    An insertion-ordered vocabulary with occurrence counts.

    Adding a word that is already present only increases its count; its
    position stays where it was first seen.
    """
    def __init__(self, words: Iterable[str] = ()):
        self._counts = OrderedDict()
        for word in words:
            self._counts[word] = self._counts.get(word, 0) + 1

    @classmethod
    def from_corpus(cls, corpus) -> "CompletionDictionary":
        """
        Derive a dictionary from a corpus, typically one normalized but not
        yet stemmed. Tokens are used when present, whitespace-split text otherwise.
        """
        words = []
        for doc in corpus:
            words.extend(doc.tokens if doc.is_tokenized else doc.text.split())
        return cls(words)

    @classmethod
    def from_file(cls, filepath: str) -> "CompletionDictionary":
        """Read whitespace-separated words from a file."""
        with open(filepath, encoding="utf-8") as file:
            return cls(word for line in file for word in line.split())

    def __contains__(self, word) -> bool:
        return word in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self):
        return iter(self._counts)

    def count(self, word: str) -> int:
        return self._counts.get(word, 0)

    @property
    def words(self) -> List[str]:
        return list(self._counts)

    def __repr__(self):
        return f"CompletionDictionary(words={len(self)})"


class StemCompleter:
    """
    Completes stems against a dictionary.

    Attributes:
        dictionary (CompletionDictionary): Reference vocabulary
        stemmer (Stemmer): Algorithm used to stem dictionary words; must be the
                           one that produced the stems being completed
        policy (str): Tie-break policy (see module docstring)
    """
    def __init__(self, dictionary, stemmer: Optional[Stemmer] = None, policy: str = "first"):
        if policy not in POLICIES:
            raise ConfigurationError(f"Unknown completion policy {policy!r}; expected one of {POLICIES}")
        if not isinstance(dictionary, CompletionDictionary):
            dictionary = CompletionDictionary(dictionary)
        self.dictionary = dictionary
        self.stemmer = stemmer or Stemmer()
        self.policy = policy
        self._candidates = self._index()

    def _index(self) -> Dict[str, List[str]]:
        candidates = {}
        for word in self.dictionary:
            candidates.setdefault(self.stemmer.stem(word), []).append(word)
        return candidates

    def candidates(self, stem: str) -> Tuple[str, ...]:
        return tuple(self._candidates.get(stem, ()))

    def _choose(self, candidates: Tuple[str, ...]) -> str:
        # max/min return the first of equal keys, which keeps ties in insertion order
        if self.policy == "prevalent":
            return max(candidates, key=self.dictionary.count)
        if self.policy == "longest":
            return max(candidates, key=len)
        if self.policy == "shortest":
            return min(candidates, key=len)
        return candidates[0]

    def complete(self, stem: str) -> CompletionResult:
        candidates = self.candidates(stem)
        if not candidates:
            return CompletionResult(stem=stem, word=stem)
        return CompletionResult(stem=stem, word=self._choose(candidates), candidates=candidates)

    def complete_tokens(self, stems: Iterable[str]) -> List[str]:
        return [self.complete(s).word for s in stems]

    def __getstate__(self):
        return {"dictionary": self.dictionary, "stemmer": self.stemmer, "policy": self.policy}

    def __setstate__(self, state):
        self.__init__(state["dictionary"], state["stemmer"], state["policy"])

    def __repr__(self):
        return f"StemCompleter(words={len(self.dictionary)}, policy={self.policy!r})"


def complete(stemmed_token: str, dictionary, stemmer: Optional[Stemmer] = None,
             policy: str = "first") -> CompletionResult:
    """
    Complete a single stem against a dictionary.

    For many lookups build a StemCompleter once instead; this helper stems the
    whole dictionary on every call.
    """
    return StemCompleter(dictionary, stemmer, policy).complete(stemmed_token)
