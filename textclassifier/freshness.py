"""Freshness tracking for resolved classifiers.

A classifier records the lexicon artifact's modification time when it is
resolved. ``needs_refresh`` compares that value with what is on disk now; any
difference means a new model was written and the caller should resolve again.
Nothing here reloads models.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textclassifier.classifiers.base import TextClassifier

logger = logging.getLogger(__name__)


def lexicon_mtime(resource_dir: str | Path, lexicon_name: str) -> int | None:
    """Modification time of the lexicon artifact in nanoseconds.

    Returns:
        The mtime, or None if the artifact no longer exists.
    """
    try:
        return (Path(resource_dir) / lexicon_name).stat().st_mtime_ns
    except FileNotFoundError:
        return None


def needs_refresh(classifier: TextClassifier) -> bool:
    """Return True if the lexicon on disk differs from the one loaded.

    Only exact equality of modification times counts as fresh. A lexicon
    deleted since load is reported as stale.
    """
    current = lexicon_mtime(classifier.resource_dir, classifier.lexicon_name)
    if current is None:
        logger.warning(
            "Lexicon %s missing from %s, treating model as stale",
            classifier.lexicon_name,
            classifier.resource_dir,
        )
        return True

    stale = current != classifier.lexicon_mtime
    if stale:
        logger.debug(
            "Lexicon in %s changed (loaded=%s, on disk=%s)",
            classifier.resource_dir,
            classifier.lexicon_mtime,
            current,
        )
    return stale


__all__ = ["lexicon_mtime", "needs_refresh"]
