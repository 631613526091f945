"""Nearest-centroid classifier.

Model artifact: numpy ``.npz`` archive with an array ``centroids`` of shape
(label_count, vocabulary_size), one mean feature vector per label.

Scores are cosine similarities in [-1, 1] between the document's feature
vector and each centroid. An empty document scores 0.0 for every label.
"""

from __future__ import annotations

import logging
import zipfile

import numpy as np

from textclassifier.classifiers.base import TextClassifier
from textclassifier.classifiers.registry import default_registry
from textclassifier.document import Document
from textclassifier.errors import ErrorCode, ModelLoadError

logger = logging.getLogger(__name__)


@default_registry.register("centroid")
class CentroidClassifier(TextClassifier):
    classifier_type = "centroid"

    _centroids: np.ndarray

    def _read_model(self) -> None:
        path = self.model_path
        try:
            with path.open("rb") as f, np.load(f, allow_pickle=False) as data:
                centroids = np.asarray(data["centroids"], dtype=np.float64)
        except (OSError, EOFError, KeyError, TypeError, ValueError, zipfile.BadZipFile) as e:
            raise ModelLoadError(
                f"Cannot read centroids from {path}: {e}",
                model_path=str(path),
                classifier_type=self.classifier_type,
                cause=e,
            ) from e

        expected = (self.lexicon.label_count, self.lexicon.vocabulary_size)
        if centroids.shape != expected:
            raise ModelLoadError(
                f"Centroid shape {centroids.shape} does not match lexicon {expected}",
                model_path=str(path),
                classifier_type=self.classifier_type,
                code=ErrorCode.MDL_INCOMPATIBLE,
            )

        norms = np.linalg.norm(centroids, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        self._centroids = centroids / norms
        logger.debug("Loaded %d centroids", centroids.shape[0])

    def _score(self, document: Document) -> np.ndarray:
        vector = document.feature_vector(self.lexicon)
        norm = np.linalg.norm(vector)
        if norm == 0:
            return np.zeros(self.lexicon.label_count, dtype=np.float64)
        return self._centroids @ (vector / norm)


__all__ = ["CentroidClassifier"]
