"""TextClassifier - the contract every classifier variant fulfils.

A variant knows how to read its own model artifact and how to score one
document. Everything else (document binding checks, batching, label
decisions, freshness) lives here so callers see one surface regardless of the
model behind it.

Variants implement:
    _read_model()       -> read and validate the model artifact
    _score(document)    -> 1-D score vector for one document
    _score_batch(docs)  -> optional, batched inference (n, N)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

import numpy as np

from textclassifier.document import Document, Field
from textclassifier.errors import ErrorCode, InferenceError
from textclassifier.freshness import needs_refresh
from textclassifier.lexicon import Lexicon
from textclassifier.scoring import DegeneratePolicy, best_label, best_labels, platt_normalisation

logger = logging.getLogger(__name__)


class TextClassifier(ABC):
    """Base class for classifier variants.

    Instances are created by ``textclassifier.resolve`` and are read-only once
    ``load_model`` has returned, so concurrent ``classify`` calls are safe.

    Attributes:
        lexicon: Lexicon the model was trained with.
        resource_dir: Absolute path of the resource directory.
        lexicon_name: File name of the lexicon artifact.
        model_name: File name of the model artifact.
        lexicon_mtime: Lexicon modification time (ns) recorded at resolution.
    """

    classifier_type: ClassVar[str] = ""

    def __init__(
        self,
        lexicon: Lexicon,
        resource_dir: str | Path,
        *,
        lexicon_mtime: int | None = None,
        lexicon_name: str = "lexicon",
        model_name: str = "model",
    ) -> None:
        self.lexicon = lexicon
        self.resource_dir = Path(resource_dir).resolve()
        self.lexicon_name = lexicon_name
        self.model_name = model_name
        self.lexicon_mtime = lexicon_mtime
        self._loaded = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(resource_dir={str(self.resource_dir)!r}, "
            f"labels={self.lexicon.label_count}, loaded={self._loaded})"
        )

    @property
    def model_path(self) -> Path:
        return self.resource_dir / self.model_name

    @property
    def labels(self) -> tuple[str, ...]:
        return self.lexicon.labels

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # Model loading

    def load_model(self) -> None:
        """Read this variant's parameters from the resource directory.

        Raises:
            ModelLoadError: On corrupt, missing or incompatible model data.
        """
        self._read_model()
        self._loaded = True
        logger.info(
            "Loaded %s model from %s (%d labels)",
            self.classifier_type or self.__class__.__name__,
            self.model_path,
            self.lexicon.label_count,
        )

    @abstractmethod
    def _read_model(self) -> None: ...

    # Inference

    @abstractmethod
    def _score(self, document: Document) -> np.ndarray: ...

    def _score_batch(self, documents: Sequence[Document]) -> np.ndarray:
        n_labels = self.lexicon.label_count
        rows = []
        for position, doc in enumerate(documents):
            row = np.asarray(self._score(doc), dtype=np.float64).reshape(-1)
            if row.shape[0] != n_labels:
                raise InferenceError(
                    f"Model produced {row.shape[0]} scores for {n_labels} labels",
                    details={"position": position},
                )
            rows.append(row)
        return np.vstack(rows)

    def _check_ready(self, documents: Sequence[Document]) -> None:
        if not self._loaded:
            raise InferenceError(
                "Model has not been loaded",
                code=ErrorCode.MDL_NOT_LOADED,
                details={"resource_dir": str(self.resource_dir)},
            )
        for position, doc in enumerate(documents):
            if not doc.is_bound_to(self.lexicon):
                raise InferenceError(
                    "Document was built against a different lexicon",
                    details={"position": position, "resource_dir": str(self.resource_dir)},
                )

    def classify(self, document: Document) -> np.ndarray:
        """Score one document.

        Returns:
            Scores index-aligned with ``labels``. Probabilities or raw scores
            depending on the variant.

        Raises:
            InferenceError: If the document does not belong to this model's
                lexicon or the model is not loaded.
        """
        self._check_ready([document])
        scores = np.asarray(self._score(document), dtype=np.float64).reshape(-1)
        if scores.shape[0] != self.lexicon.label_count:
            raise InferenceError(
                f"Model produced {scores.shape[0]} scores for {self.lexicon.label_count} labels"
            )
        return scores

    def classify_batch(self, documents: Sequence[Document]) -> np.ndarray:
        """Score many documents.

        Row ``i`` of the result holds the scores of ``documents[i]``. Any
        failure aborts the whole call.

        Returns:
            Array of shape (len(documents), label_count).
        """
        docs = list(documents)
        n_labels = self.lexicon.label_count
        self._check_ready(docs)
        if not docs:
            return np.empty((0, n_labels), dtype=np.float64)

        scores = np.asarray(self._score_batch(docs), dtype=np.float64)
        if scores.shape != (len(docs), n_labels):
            raise InferenceError(
                f"Model produced scores of shape {scores.shape}, "
                f"expected {(len(docs), n_labels)}"
            )
        logger.debug("Classified %d documents", len(docs))
        return scores

    def _feature_matrix(self, documents: Sequence[Document]) -> np.ndarray:
        return np.vstack([doc.feature_vector(self.lexicon) for doc in documents])

    # Documents

    def create_document(self, fields: Sequence[Field]) -> Document:
        return Document.from_fields(fields, self.lexicon)

    def create_document_from_tokens(self, tokens: Sequence[str]) -> Document:
        return Document.from_tokens(tokens, self.lexicon)

    def create_document_from_text(self, text: str) -> Document:
        return Document.from_text(text, self.lexicon)

    # Labels and freshness

    def best_label(self, scores: Sequence[float] | np.ndarray) -> str:
        return best_label(scores, self.lexicon)

    def best_labels(
        self,
        scores: Sequence[float] | np.ndarray,
        ratio: float,
        *,
        on_degenerate: DegeneratePolicy | None = None,
    ) -> list[str]:
        return best_labels(scores, self.lexicon, ratio, on_degenerate=on_degenerate)

    def platt_normalisation(self, x: float | np.ndarray) -> float | np.ndarray:
        return platt_normalisation(x)

    def needs_refreshing(self) -> bool:
        return needs_refresh(self)


__all__ = ["TextClassifier"]
