# textmatrix/matrix/term_index.py
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from textmatrix.errors import ConfigurationError

TERM_ORDERS = ("first_seen", "lexicographic")


class TermIndex:
    """
    Dense, contiguous mapping from term to integer id.

    Ids follow the order in which terms were given, so an index built from
    the same input is always identical.
    """
    def __init__(self, terms: Iterable[str] = ()):
        self._terms: Tuple[str, ...] = tuple(terms)
        self._ids: Dict[str, int] = {}
        for term_id, term in enumerate(self._terms):
            if term in self._ids:
                raise ValueError(f"Duplicate term {term!r} in term index")
            self._ids[term] = term_id

    @classmethod
    def from_token_lists(cls, token_lists: Iterable[Iterable[str]], order: str = "first_seen") -> "TermIndex":
        """
        Build an index over every distinct token.

        Args:
            token_lists: Token sequences in document order
            order (str): 'first_seen' (document order, then token order) or 'lexicographic'
        """
        if order not in TERM_ORDERS:
            raise ConfigurationError(f"Unknown term order {order!r}; expected one of {TERM_ORDERS}")
        seen = {}
        for tokens in token_lists:
            for token in tokens:
                seen.setdefault(token, None)
        terms = sorted(seen) if order == "lexicographic" else list(seen)
        return cls(terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __contains__(self, term) -> bool:
        return term in self._ids

    def __getitem__(self, term: str) -> int:
        return self._ids[term]

    def __eq__(self, other):
        if not isinstance(other, TermIndex):
            return NotImplemented
        return self._terms == other._terms

    def __repr__(self):
        return f"TermIndex(terms={len(self)})"

    @property
    def terms(self) -> Tuple[str, ...]:
        return self._terms

    def get(self, term: str, default=None):
        return self._ids.get(term, default)

    def term(self, term_id: int) -> str:
        return self._terms[term_id]

    def lookup(self, terms: Sequence[str]) -> List[int]:
        return [self._ids[t] for t in terms]

    def subset(self, term_ids: Iterable[int]) -> "TermIndex":
        """Keep the given ids, in the given order, and re-number them from 0."""
        return TermIndex(self._terms[i] for i in term_ids)
