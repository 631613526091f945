"""Classifier variants and the registry that selects between them.

Importing this package registers the built-in variants:

- "linear": weights + bias per label (JSON model)
- "centroid": cosine similarity to per-label centroids (npz model)
- "sklearn" / "svm": pickled scikit-learn estimator

Usage:
    from textclassifier.classifiers import default_registry

    default_registry.keys()  # ['centroid', 'linear', 'sklearn', 'svm']
"""

from textclassifier.classifiers.base import TextClassifier
from textclassifier.classifiers.centroid import CentroidClassifier
from textclassifier.classifiers.linear import LinearClassifier
from textclassifier.classifiers.registry import ClassifierRegistry, default_registry
from textclassifier.classifiers.sklearn_model import SklearnClassifier

__all__ = [
    "TextClassifier",
    "ClassifierRegistry",
    "default_registry",
    "LinearClassifier",
    "CentroidClassifier",
    "SklearnClassifier",
]
