"""Resource resolution - from a model directory (or archive) to a loaded classifier.

Usage:
    from textclassifier import resolve

    classifier = resolve("models/news")        # directory
    classifier = resolve("models/news.zip")    # packed directory
    scores = classifier.classify(classifier.create_document_from_text("..."))
"""

from __future__ import annotations

import logging
from pathlib import Path

from textclassifier.archive import unpack
from textclassifier.classifiers import TextClassifier
from textclassifier.classifiers.registry import ClassifierRegistry, default_registry
from textclassifier.config import ClassifierConfig, get_config
from textclassifier.errors import artifact_not_found
from textclassifier.freshness import lexicon_mtime
from textclassifier.lexicon import Lexicon

logger = logging.getLogger(__name__)


def resolve(
    path: str | Path,
    *,
    config: ClassifierConfig | None = None,
    registry: ClassifierRegistry | None = None,
) -> TextClassifier:
    """Instantiate and load the classifier described by a resource directory.

    Checks, in order: the directory exists, the lexicon artifact exists, the
    model artifact exists. The lexicon names the classifier key, which is
    looked up in ``registry``; the new instance then loads its model.

    Args:
        path: Resource directory, or an archive with the configured suffix.
        config: Settings to use. Defaults to get_config().
        registry: Classifier registry. Defaults to the built-in registry.

    Returns:
        A loaded classifier.

    Raises:
        NotFoundError: Missing directory, artifact, or unregistered classifier.
        ModelLoadError: Corrupt archive, lexicon or model data.
    """
    config = config or get_config()
    registry = registry or default_registry
    resource_dir = Path(path)

    if resource_dir.name.endswith(config.archive_suffix) and resource_dir.is_file():
        resource_dir = unpack(
            resource_dir, suffix=config.archive_suffix, unpack_dir=config.unpack_dir
        )

    if not resource_dir.is_dir():
        raise artifact_not_found("Directory", str(resource_dir.absolute()))

    lexicon_file = resource_dir / config.lexicon_name
    if not lexicon_file.is_file():
        raise artifact_not_found("Lexicon", str(lexicon_file))

    model_file = resource_dir / config.model_name
    if not model_file.exists():
        raise artifact_not_found("Model", str(model_file))

    mtime = lexicon_mtime(resource_dir, config.lexicon_name)
    lexicon = Lexicon.load(lexicon_file)
    factory = registry.get(lexicon.classifier_type)

    classifier = factory(
        lexicon,
        resource_dir,
        lexicon_mtime=mtime,
        lexicon_name=config.lexicon_name,
        model_name=config.model_name,
    )
    classifier.load_model()

    logger.info(
        "Resolved %s classifier from %s (%d labels)",
        lexicon.classifier_type,
        classifier.resource_dir,
        lexicon.label_count,
    )
    return classifier


__all__ = ["resolve"]
