"""Linear classifier: one weight vector and bias per label.

Model artifact (JSON):
    {"weights": [[w_0_0, ..., w_0_V], ...], "bias": [b_0, ...]}

Scores are raw margins ``W @ x + b``. When the lexicon metadata sets
``"normalise": true`` the margins are passed through platt_normalisation and
lie in (0, 1); they are still independent per label and do not sum to 1.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

import numpy as np

from textclassifier.classifiers.base import TextClassifier
from textclassifier.classifiers.registry import default_registry
from textclassifier.document import Document
from textclassifier.errors import ErrorCode, ModelLoadError
from textclassifier.scoring import platt_normalisation

logger = logging.getLogger(__name__)


@default_registry.register("linear")
class LinearClassifier(TextClassifier):
    classifier_type = "linear"

    _weights: np.ndarray
    _bias: np.ndarray

    def _read_model(self) -> None:
        path = self.model_path
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            weights = np.asarray(data["weights"], dtype=np.float64)
            bias = np.asarray(data.get("bias", np.zeros(len(weights))), dtype=np.float64)
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ModelLoadError(
                f"Cannot read linear model {path}: {e}",
                model_path=str(path),
                classifier_type=self.classifier_type,
                cause=e,
            ) from e

        expected = (self.lexicon.label_count, self.lexicon.vocabulary_size)
        if weights.ndim != 2 or weights.shape != expected or bias.shape != (expected[0],):
            raise ModelLoadError(
                f"Linear model shape {weights.shape}/{bias.shape} "
                f"does not match lexicon {expected}",
                model_path=str(path),
                classifier_type=self.classifier_type,
                code=ErrorCode.MDL_INCOMPATIBLE,
            )

        self._weights = weights
        self._bias = bias

    @property
    def normalise(self) -> bool:
        return bool(self.lexicon.metadata.get("normalise", False))

    def _score(self, document: Document) -> np.ndarray:
        return self._score_batch([document])[0]

    def _score_batch(self, documents: Sequence[Document]) -> np.ndarray:
        margins = self._feature_matrix(documents) @ self._weights.T + self._bias
        if self.normalise:
            return platt_normalisation(margins)
        return margins


__all__ = ["LinearClassifier"]
