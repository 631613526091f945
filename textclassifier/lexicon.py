"""Lexicon - label vocabulary, token vocabulary and classifier metadata.

A lexicon is written next to the model when a classifier is trained and is the
single source of truth for:

- the ordered label list (score vectors are index-aligned with it),
- the token vocabulary used to build feature vectors,
- the weighting scheme applied to term counts,
- the registry key of the classifier implementation that owns the model.

On-disk format (JSON):
    {
        "classifier": "linear",
        "labels": ["sports", "tech"],
        "vocabulary": ["ball", "cpu"],
        "doc_freq": [3, 1],
        "doc_count": 10,
        "weighting": "tfidf",
        "metadata": {"normalise": true}
    }
"""

from __future__ import annotations

import hashlib
import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Any, Literal

import numpy as np
from pydantic import BaseModel, Field, ValidationError, model_validator

from textclassifier.errors import InvalidArgumentError, ModelLoadError

logger = logging.getLogger(__name__)

Weighting = Literal["occurrences", "boolean", "frequency", "tfidf"]


class LexiconFile(BaseModel):
    """Schema of the lexicon artifact."""

    classifier: str = Field(min_length=1)
    labels: list[str] = Field(min_length=1)
    vocabulary: list[str] = Field(default_factory=list)
    doc_freq: list[int] | None = None
    doc_count: int = Field(default=0, ge=0)
    weighting: Weighting = "occurrences"
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_consistency(self) -> LexiconFile:
        if len(set(self.labels)) != len(self.labels):
            raise ValueError("labels must be unique")
        if len(set(self.vocabulary)) != len(self.vocabulary):
            raise ValueError("vocabulary entries must be unique")
        if self.doc_freq is not None:
            if len(self.doc_freq) != len(self.vocabulary):
                raise ValueError("doc_freq must have one entry per vocabulary token")
            if any(df < 0 for df in self.doc_freq):
                raise ValueError("doc_freq entries must be >= 0")
        return self


@dataclass(frozen=True)
class Lexicon:
    """Immutable label and token vocabulary for one trained model.

    Attributes:
        labels: Label strings, position = label index.
        classifier_type: Registry key of the classifier implementation.
        vocabulary: Read-only token -> feature index mapping.
        doc_freq: Training document frequency per feature index.
        doc_count: Number of training documents.
        weighting: How term counts become feature values.
        metadata: Free-form, variant-specific settings.
        fingerprint: Digest of the artifact, or of the content when none is
            given; documents carry it to prove which lexicon they were
            built against.
        path: Artifact location when loaded from disk.
    """

    labels: tuple[str, ...]
    classifier_type: str
    vocabulary: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    doc_freq: tuple[int, ...] = ()
    doc_count: int = 0
    weighting: Weighting = "occurrences"
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    fingerprint: str = ""
    path: Path | None = None

    def __post_init__(self) -> None:
        if not self.fingerprint:
            object.__setattr__(self, "fingerprint", self._content_fingerprint())

    def _content_fingerprint(self) -> str:
        content = {
            "classifier": self.classifier_type,
            "labels": list(self.labels),
            "vocabulary": sorted(self.vocabulary, key=self.vocabulary.__getitem__),
            "doc_freq": list(self.doc_freq),
            "doc_count": self.doc_count,
            "weighting": self.weighting,
            "metadata": dict(self.metadata),
        }
        canonical = json.dumps(content, sort_keys=True, default=str).encode("utf-8")
        return hashlib.sha256(canonical).hexdigest()

    @classmethod
    def load(cls, path: str | Path) -> Lexicon:
        """Read and validate a lexicon artifact.

        Raises:
            ModelLoadError: If the file cannot be read or fails validation.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
            data = json.loads(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ModelLoadError(
                f"Cannot read lexicon {path}: {e}", model_path=str(path), cause=e
            ) from e

        lexicon = cls.from_dict(data, fingerprint=hashlib.sha256(raw).hexdigest(), path=path)
        logger.debug(
            "Loaded lexicon %s: %d labels, %d tokens, classifier=%s",
            path,
            lexicon.label_count,
            lexicon.vocabulary_size,
            lexicon.classifier_type,
        )
        return lexicon

    @classmethod
    def from_dict(
        cls,
        data: Any,
        *,
        fingerprint: str | None = None,
        path: Path | None = None,
    ) -> Lexicon:
        """Build a lexicon from its decoded JSON form."""
        try:
            parsed = LexiconFile.model_validate(data)
        except ValidationError as e:
            raise ModelLoadError(
                f"Invalid lexicon: {e}",
                model_path=str(path) if path else None,
                cause=e,
            ) from e

        doc_freq = parsed.doc_freq if parsed.doc_freq is not None else [1] * len(parsed.vocabulary)
        return cls(
            labels=tuple(parsed.labels),
            classifier_type=parsed.classifier,
            vocabulary=MappingProxyType({tok: i for i, tok in enumerate(parsed.vocabulary)}),
            doc_freq=tuple(doc_freq),
            doc_count=parsed.doc_count,
            weighting=parsed.weighting,
            metadata=MappingProxyType(dict(parsed.metadata)),
            fingerprint=fingerprint or "",
            path=path,
        )

    @property
    def label_count(self) -> int:
        return len(self.labels)

    @property
    def vocabulary_size(self) -> int:
        return len(self.vocabulary)

    def label(self, index: int) -> str:
        """Return the label string at ``index``."""
        if not 0 <= index < len(self.labels):
            raise InvalidArgumentError(
                f"Label index {index} out of range for {len(self.labels)} labels",
                field="index",
                value=index,
            )
        return self.labels[index]

    def label_index(self, label: str) -> int:
        try:
            return self.labels.index(label)
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown label {label!r}", field="label", value=label
            ) from None

    def token_index(self, token: str) -> int | None:
        """Feature index of ``token``, or None when it is out of vocabulary."""
        return self.vocabulary.get(token)

    @cached_property
    def idf(self) -> np.ndarray:
        """Smoothed inverse document frequency per feature index.

        idf = ln((1 + doc_count) / (1 + df)) + 1, so unseen statistics still
        give every token a positive weight.
        """
        n = self.doc_count
        return np.array(
            [math.log((1 + n) / (1 + df)) + 1.0 for df in self.doc_freq],
            dtype=np.float64,
        )


__all__ = ["Lexicon", "LexiconFile", "Weighting"]
