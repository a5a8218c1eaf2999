"""
Corpus Model

This module defines the immutable Document and Corpus types and the
CorpusBuilder that turns ordered sources of raw strings into a Corpus.

Document order is significant and always equals input order, so the corpus
can be aligned with external metadata (timestamps, authors, ...). Normalizing
a corpus never mutates it: every transformation returns a new Corpus.
"""
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Sequence, Tuple

from textmatrix.errors import InputShapeError


@dataclass(frozen=True)
class Document:
    """
    A single document of the corpus.

    Attributes:
        id: Stable index or externally supplied key
        raw_text (str): The original input string
        text (str): The current normalized text
        tokens (tuple, optional): Token sequence, None until tokenized
    """
    id: Hashable
    raw_text: str
    text: str
    tokens: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_text(cls, doc_id, text: str) -> "Document":
        return cls(id=doc_id, raw_text=text, text=text)

    def with_text(self, text: str) -> "Document":
        # Tokens derive from the text, so a new text invalidates them
        return replace(self, text=text, tokens=None)

    def with_tokens(self, tokens: Iterable[str]) -> "Document":
        return replace(self, tokens=tuple(tokens))

    @property
    def is_tokenized(self) -> bool:
        return self.tokens is not None


class Corpus:
    """
    An ordered, immutable sequence of Documents with unique ids.
    """
    def __init__(self, documents: Iterable[Document] = ()):
        self._documents = tuple(documents)
        self._positions = {}
        for position, doc in enumerate(self._documents):
            if doc.id in self._positions:
                raise ValueError(f"Duplicate document id {doc.id!r} at position {position}")
            self._positions[doc.id] = position

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __getitem__(self, position):
        if isinstance(position, slice):
            return Corpus(self._documents[position])
        return self._documents[position]

    def __eq__(self, other):
        if not isinstance(other, Corpus):
            return NotImplemented
        return self._documents == other._documents

    def __repr__(self):
        return f"Corpus(documents={len(self)})"

    @property
    def documents(self) -> Tuple[Document, ...]:
        return self._documents

    @property
    def ids(self) -> List[Hashable]:
        return [doc.id for doc in self._documents]

    @property
    def texts(self) -> List[str]:
        return [doc.text for doc in self._documents]

    @property
    def is_tokenized(self) -> bool:
        return all(doc.is_tokenized for doc in self._documents)

    def token_lists(self) -> List[Tuple[str, ...]]:
        """Return each document's tokens, in corpus order."""
        missing = [doc.id for doc in self._documents if not doc.is_tokenized]
        if missing:
            raise ValueError(f"Corpus is not tokenized (first untokenized document: {missing[0]!r})")
        return [doc.tokens for doc in self._documents]

    def get(self, doc_id) -> Document:
        return self._documents[self._positions[doc_id]]

    def position_of(self, doc_id) -> int:
        return self._positions[doc_id]

    def map_text(self, func: Callable[[str], str]) -> "Corpus":
        """Apply a text transformation to every document, preserving order."""
        return Corpus(doc.with_text(func(doc.text)) for doc in self._documents)

    def with_texts(self, texts: Sequence[str]) -> "Corpus":
        if len(texts) != len(self._documents):
            raise ValueError(f"Expected {len(self._documents)} texts, got {len(texts)}")
        return Corpus(doc.with_text(text) for doc, text in zip(self._documents, texts))

    def with_tokens(self, token_lists: Sequence[Iterable[str]]) -> "Corpus":
        if len(token_lists) != len(self._documents):
            raise ValueError(f"Expected {len(self._documents)} token lists, got {len(token_lists)}")
        return Corpus(doc.with_tokens(tokens) for doc, tokens in zip(self._documents, token_lists))

    def tokenize(self, tokenizer) -> "Corpus":
        """Derive each document's tokens from its current text."""
        return Corpus(doc.with_tokens(tokenizer.tokenize(doc.text)) for doc in self._documents)


def _require_text(value, index, column=None) -> str:
    if not isinstance(value, str):
        where = f"row {index}, column {column!r}" if column is not None else f"element {index}"
        raise InputShapeError(
            f"Expected a string at {where}, got {type(value).__name__}",
            index=index, column=column
        )
    return value


def _reject_bare_string(source, name):
    if isinstance(source, (str, bytes)):
        raise InputShapeError(
            f"Expected a sequence for {name}, got a single {type(source).__name__}; wrap it in a list"
        )


class CorpusBuilder:
    """
    Builds a Corpus from ordered sources of raw text.

    The builder never infers which columns of a tabular source are textual
    and never coerces non-string values: anything that is not a str fails
    fast with an InputShapeError naming the offending position.
    """

    @staticmethod
    def from_texts(texts: Iterable[str], ids: Optional[Sequence[Hashable]] = None) -> Corpus:
        """
        Build a corpus from a sequence of strings.

        Args:
            texts: Ordered raw document strings
            ids: Optional external keys; positional indices are used otherwise

        Returns:
            Corpus: Documents in input order
        """
        _reject_bare_string(texts, "texts")
        texts = list(texts)
        if ids is not None:
            ids = list(ids)
            if len(ids) != len(texts):
                raise ValueError(f"Got {len(ids)} ids for {len(texts)} texts")
        else:
            ids = list(range(len(texts)))

        return Corpus(
            Document.from_text(doc_id, _require_text(text, i))
            for i, (doc_id, text) in enumerate(zip(ids, texts))
        )

    @staticmethod
    def from_pairs(pairs: Iterable[Tuple[Hashable, str]]) -> Corpus:
        """
        Build a corpus from any source yielding (key, text) pairs in order.
        """
        _reject_bare_string(pairs, "pairs")
        documents = []
        for i, pair in enumerate(pairs):
            try:
                doc_id, text = pair
            except (TypeError, ValueError):
                raise InputShapeError(f"Expected a (key, text) pair at element {i}", index=i) from None
            documents.append(Document.from_text(doc_id, _require_text(text, i)))
        return Corpus(documents)

    @staticmethod
    def from_table(table, text_columns: Sequence[str], id_column: Optional[str] = None,
                   separator: str = " ") -> Corpus:
        """
        Build a corpus from a tabular source.

        Args:
            table: A pandas DataFrame or a sequence of mappings (one per row)
            text_columns: Columns holding document text, joined in the given order
            id_column: Optional column holding document keys
            separator (str): String placed between text column values

        Returns:
            Corpus: One document per row, in row order

        Raises:
            InputShapeError: If a text column is missing or holds a non-string value
        """
        if isinstance(text_columns, str):
            text_columns = [text_columns]
        if not text_columns:
            raise ValueError("At least one text column must be selected")

        rows = _iter_rows(table)
        documents = []
        for i, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise InputShapeError(f"Row {i} is not a mapping of column names to values", index=i)
            parts = []
            for column in text_columns:
                if column not in row:
                    raise InputShapeError(f"Row {i} has no column {column!r}", index=i, column=column)
                parts.append(_require_text(row[column], i, column))
            if id_column is not None and id_column not in row:
                raise InputShapeError(f"Row {i} has no id column {id_column!r}", index=i, column=id_column)
            doc_id = row[id_column] if id_column is not None else i
            documents.append(Document.from_text(doc_id, separator.join(parts)))
        return Corpus(documents)

    @staticmethod
    def from_directory(directory: str, suffix: str = ".txt", encoding: str = "utf-8") -> Corpus:
        """
        Build a corpus from the text files of a directory.

        Files are read in filename order and keyed by their filename.
        """
        filenames = sorted(entry.name for entry in os.scandir(directory)
                           if entry.is_file() and entry.name.endswith(suffix))
        documents = []
        for filename in filenames:
            with open(os.path.join(directory, filename), 'r', encoding=encoding, errors='ignore') as f:
                documents.append(Document.from_text(filename, f.read()))
        return Corpus(documents)

    @staticmethod
    def from_lines(filepath: str, encoding: str = "utf-8", skip_blank: bool = True) -> Corpus:
        """Build a corpus from a file holding one document per line."""
        with open(filepath, 'r', encoding=encoding, errors='ignore') as f:
            lines = [line.rstrip("\n") for line in f]
        if skip_blank:
            lines = [line for line in lines if line.strip()]
        return CorpusBuilder.from_texts(lines)


def _iter_rows(table) -> Iterator[Dict[str, Any]]:
    # pandas DataFrame: iterate rows as dicts without touching dtypes
    if hasattr(table, "to_dict") and hasattr(table, "columns"):
        return iter(table.to_dict(orient="records"))
    return iter(table)
