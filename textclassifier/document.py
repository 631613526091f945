"""Documents bound to a lexicon.

A Document is the value object handed to a classifier. It is built once from
either a flat token sequence or a set of named fields and records term counts
against the lexicon's vocabulary, so vocabulary bookkeeping stays consistent
with the model that will score it. Out-of-vocabulary tokens are counted in
``token_count`` but never added to the lexicon.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from textclassifier.errors import InferenceError
from textclassifier.lexicon import Lexicon

_TOKEN_RE = re.compile(r"\w+(?:'\w+)?")

# Multi-field lexicons store field-scoped tokens as "<field>:<token>"
FIELD_SEPARATOR = ":"


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens from free text."""
    return _TOKEN_RE.findall((text or "").lower())


@dataclass(frozen=True)
class Field:
    """A named token sequence, e.g. the title or body of a document."""

    name: str
    tokens: tuple[str, ...]

    @classmethod
    def from_text(cls, name: str, text: str) -> Field:
        return cls(name=name, tokens=tuple(tokenize(text)))


@dataclass(frozen=True)
class Document:
    """Immutable term counts over one lexicon's vocabulary.

    Attributes:
        counts: Read-only feature index -> occurrence count.
        token_count: Tokens seen while building, including unknown ones.
        lexicon_fingerprint: Fingerprint of the lexicon used to build it.
        field_names: Field names for multi-field documents, empty otherwise.
    """

    counts: Mapping[int, int]
    token_count: int
    lexicon_fingerprint: str
    field_names: tuple[str, ...] = field(default=())

    @classmethod
    def from_tokens(cls, tokens: Iterable[str], lexicon: Lexicon) -> Document:
        """Build a single-field document from a flat token sequence."""
        counts: Counter[int] = Counter()
        total = 0
        for token in tokens:
            total += 1
            index = lexicon.token_index(token)
            if index is not None:
                counts[index] += 1
        return cls(
            counts=MappingProxyType(dict(counts)),
            token_count=total,
            lexicon_fingerprint=lexicon.fingerprint,
        )

    @classmethod
    def from_fields(cls, fields: Sequence[Field], lexicon: Lexicon) -> Document:
        """Build a document from named fields.

        Each token is looked up field-scoped first, then bare.
        """
        counts: Counter[int] = Counter()
        total = 0
        for fld in fields:
            for token in fld.tokens:
                total += 1
                index = lexicon.token_index(f"{fld.name}{FIELD_SEPARATOR}{token}")
                if index is None:
                    index = lexicon.token_index(token)
                if index is not None:
                    counts[index] += 1
        return cls(
            counts=MappingProxyType(dict(counts)),
            token_count=total,
            lexicon_fingerprint=lexicon.fingerprint,
            field_names=tuple(fld.name for fld in fields),
        )

    @classmethod
    def from_text(cls, text: str, lexicon: Lexicon) -> Document:
        return cls.from_tokens(tokenize(text), lexicon)

    def is_bound_to(self, lexicon: Lexicon) -> bool:
        return self.lexicon_fingerprint == lexicon.fingerprint

    def feature_vector(self, lexicon: Lexicon) -> np.ndarray:
        """Dense feature vector weighted per ``lexicon.weighting``.

        Raises:
            InferenceError: If the document was built against another lexicon.
        """
        if not self.is_bound_to(lexicon):
            raise InferenceError(
                "Document was built against a different lexicon",
                details={
                    "document_lexicon": self.lexicon_fingerprint[:12],
                    "model_lexicon": lexicon.fingerprint[:12],
                },
            )

        vector = np.zeros(lexicon.vocabulary_size, dtype=np.float64)
        if not self.counts:
            return vector

        indices = np.fromiter(self.counts.keys(), dtype=np.intp, count=len(self.counts))
        if indices.max() >= lexicon.vocabulary_size or indices.min() < 0:
            raise InferenceError(
                "Document features fall outside the lexicon vocabulary",
                details={"vocabulary_size": lexicon.vocabulary_size},
            )
        values = np.fromiter(self.counts.values(), dtype=np.float64, count=len(self.counts))

        if lexicon.weighting == "boolean":
            values = np.ones_like(values)
        elif lexicon.weighting == "frequency":
            values = values / self.token_count
        elif lexicon.weighting == "tfidf":
            values = values * lexicon.idf[indices]

        vector[indices] = values
        return vector


__all__ = ["Document", "Field", "FIELD_SEPARATOR", "tokenize"]
