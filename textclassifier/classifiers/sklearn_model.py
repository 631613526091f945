"""scikit-learn classifier loaded from a pickle.

Model artifact: a pickled fitted estimator trained on the lexicon's feature
vectors. ``classes_`` may hold label strings or label indices; a class equal
to a label string is matched by name before it is read as an index.

Scores are ``predict_proba`` probabilities when the estimator supports them,
otherwise ``decision_function`` margins (raw). Lexicon labels the estimator
never saw score 0.0.
"""

from __future__ import annotations

import logging
import pickle
from collections.abc import Sequence
from typing import Any

import numpy as np

from textclassifier.classifiers.base import TextClassifier
from textclassifier.classifiers.registry import default_registry
from textclassifier.document import Document
from textclassifier.errors import ErrorCode, InferenceError, ModelLoadError

logger = logging.getLogger(__name__)


@default_registry.register("sklearn", "svm")
class SklearnClassifier(TextClassifier):
    classifier_type = "sklearn"

    _estimator: Any
    _columns: np.ndarray
    _use_proba: bool

    def _read_model(self) -> None:
        path = self.model_path
        try:
            with path.open("rb") as f:
                estimator = pickle.load(f)
        except (
            OSError,
            EOFError,
            pickle.UnpicklingError,
            AttributeError,
            ImportError,
            TypeError,
            ValueError,
        ) as e:
            raise ModelLoadError(
                f"Cannot unpickle model {path}: {e}",
                model_path=str(path),
                classifier_type=self.classifier_type,
                cause=e,
            ) from e

        classes = getattr(estimator, "classes_", None)
        if classes is None:
            raise ModelLoadError(
                f"Model in {path} is not a fitted classifier",
                model_path=str(path),
                classifier_type=self.classifier_type,
            )

        self._columns = self._map_classes(list(classes), str(path))
        self._use_proba = hasattr(estimator, "predict_proba")
        if not self._use_proba and not hasattr(estimator, "decision_function"):
            raise ModelLoadError(
                f"Model {type(estimator).__name__} in {path} has neither "
                "predict_proba nor decision_function",
                model_path=str(path),
                classifier_type=self.classifier_type,
                code=ErrorCode.MDL_INCOMPATIBLE,
            )
        self._estimator = estimator
        logger.debug(
            "sklearn model %s: %d classes, %s",
            type(estimator).__name__,
            len(classes),
            "predict_proba" if self._use_proba else "decision_function",
        )

    def _map_classes(self, classes: list[Any], path: str) -> np.ndarray:
        """Lexicon label index for each estimator output column.

        A class matching a label string maps to that label; otherwise an
        integer class is read as a label index.
        """
        columns = []
        for cls in classes:
            if str(cls) in self.lexicon.labels:
                columns.append(self.lexicon.labels.index(str(cls)))
            elif isinstance(cls, (int, np.integer)) and 0 <= int(cls) < self.lexicon.label_count:
                columns.append(int(cls))
            else:
                raise ModelLoadError(
                    f"Model class {cls!r} is not a lexicon label",
                    model_path=path,
                    classifier_type=self.classifier_type,
                    code=ErrorCode.MDL_INCOMPATIBLE,
                )
        if len(set(columns)) != len(columns):
            raise ModelLoadError(
                "Model classes map to duplicate lexicon labels",
                model_path=path,
                classifier_type=self.classifier_type,
                code=ErrorCode.MDL_INCOMPATIBLE,
            )
        return np.asarray(columns, dtype=np.intp)

    def _score(self, document: Document) -> np.ndarray:
        return self._score_batch([document])[0]

    def _score_batch(self, documents: Sequence[Document]) -> np.ndarray:
        features = self._feature_matrix(documents)
        try:
            if self._use_proba:
                raw = self._estimator.predict_proba(features)
            else:
                raw = self._estimator.decision_function(features)
        except ValueError as e:
            raise InferenceError(f"Estimator rejected features: {e}", cause=e) from e

        raw = np.asarray(raw, dtype=np.float64)
        if raw.ndim == 1:
            # binary decision_function: margin for classes_[1]
            raw = np.column_stack([-raw, raw])

        scores = np.zeros((len(documents), self.lexicon.label_count), dtype=np.float64)
        scores[:, self._columns] = raw
        return scores


__all__ = ["SklearnClassifier"]
