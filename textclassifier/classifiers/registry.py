"""Classifier Registry - maps lexicon classifier keys to implementations.

The lexicon names the implementation that owns a model. Instead of importing
whatever that name points to, keys are looked up in an explicit registry
populated when ``textclassifier.classifiers`` is imported.

Usage:
    from textclassifier.classifiers.registry import default_registry

    @default_registry.register("my-variant")
    class MyClassifier(TextClassifier):
        ...

    classifier = default_registry.create("my-variant", lexicon, resource_dir)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from textclassifier.errors import unknown_classifier

if TYPE_CHECKING:
    from textclassifier.classifiers.base import TextClassifier

logger = logging.getLogger(__name__)

ClassifierFactory = Callable[..., "TextClassifier"]
F = TypeVar("F", bound=ClassifierFactory)


class ClassifierRegistry:
    """Thread-safe mapping of stable string keys to classifier factories."""

    def __init__(self) -> None:
        self._factories: dict[str, ClassifierFactory] = {}
        self._lock = threading.Lock()

    def register(self, key: str, *aliases: str) -> Callable[[F], F]:
        """Decorator registering a factory under ``key`` and any aliases.

        Raises:
            ValueError: If a key is already taken by a different factory.
        """

        def decorator(factory: F) -> F:
            self.add(key, factory, *aliases)
            return factory

        return decorator

    def add(self, key: str, factory: ClassifierFactory, *aliases: str) -> None:
        with self._lock:
            for name in (key, *aliases):
                existing = self._factories.get(name)
                if existing is not None and existing is not factory:
                    raise ValueError(f"Classifier key {name!r} already registered to {existing!r}")
                self._factories[name] = factory
            if isinstance(factory, type) and not getattr(factory, "classifier_type", ""):
                factory.classifier_type = key
        logger.debug("Registered classifier %r (aliases: %s)", key, list(aliases))

    def get(self, key: str) -> ClassifierFactory:
        """Return the factory for ``key``.

        Raises:
            NotFoundError: If nothing is registered under ``key``.
        """
        try:
            return self._factories[key]
        except KeyError:
            raise unknown_classifier(key, self.keys()) from None

    def create(self, key: str, *args: Any, **kwargs: Any) -> TextClassifier:
        return self.get(key)(*args, **kwargs)

    def keys(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)


default_registry = ClassifierRegistry()


__all__ = ["ClassifierFactory", "ClassifierRegistry", "default_registry"]
