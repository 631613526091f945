"""textclassifier - resolve trained text classifiers and turn scores into labels.

Usage:
    from textclassifier import resolve

    classifier = resolve("models/news")
    doc = classifier.create_document_from_text("The match ended in a draw")
    scores = classifier.classify(doc)
    classifier.best_label(scores)           # "sports"
    classifier.best_labels(scores, 0.8)     # ["sports", "politics"]
    classifier.needs_refreshing()           # False until the lexicon changes
"""

from textclassifier.classifiers import ClassifierRegistry, TextClassifier, default_registry
from textclassifier.config import ClassifierConfig, get_config, reset_config
from textclassifier.document import Document, Field, tokenize
from textclassifier.errors import (
    ConfigurationError,
    DegenerateScoresError,
    ErrorCode,
    InferenceError,
    InvalidArgumentError,
    ModelLoadError,
    NotFoundError,
    TextClassifierError,
)
from textclassifier.freshness import needs_refresh
from textclassifier.lexicon import Lexicon
from textclassifier.resolver import resolve
from textclassifier.scoring import best_label, best_labels, platt_normalisation

__version__ = "0.1.0"

__all__ = [
    "resolve",
    "TextClassifier",
    "ClassifierRegistry",
    "default_registry",
    "ClassifierConfig",
    "get_config",
    "reset_config",
    "Lexicon",
    "Document",
    "Field",
    "tokenize",
    "best_label",
    "best_labels",
    "platt_normalisation",
    "needs_refresh",
    "ErrorCode",
    "TextClassifierError",
    "ConfigurationError",
    "NotFoundError",
    "ModelLoadError",
    "InferenceError",
    "InvalidArgumentError",
    "DegenerateScoresError",
]
