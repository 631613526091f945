"""textclassifier Configuration System.

Loads and validates configuration from ~/.textclassifier/config.json (or the
file named by $TEXTCLASSIFIER_CONFIG). Uses Pydantic for schema validation
with defaults matching the conventional resource-directory layout.

Usage:
    from textclassifier.config import get_config, save_config

    config = get_config()
    print(config.lexicon_name)

    config.degenerate_scores = "reject"
    save_config(config)
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TEXTCLASSIFIER_CONFIG"
CONFIG_PATH = Path.home() / ".textclassifier" / "config.json"


def default_config_path() -> Path:
    """Return the config file path, honoring $TEXTCLASSIFIER_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


class ClassifierConfig(BaseModel):
    """Settings shared by the resolver, classifiers and score interpreter.

    Attributes:
        lexicon_name: File name of the lexicon artifact in a resource directory.
        model_name: File name of the model artifact in a resource directory.
        archive_suffix: Suffix identifying a packed resource directory.
        unpack_dir: Where archives are expanded. None = next to the archive.
        platt_sigma: Steepness of the sigmoid used by platt_normalisation.
        degenerate_scores: What best_labels does when every score is equal.
            "tie" keeps every label, "reject" raises DegenerateScoresError.
    """

    lexicon_name: str = Field(default="lexicon", min_length=1)
    model_name: str = Field(default="model", min_length=1)
    archive_suffix: str = Field(default=".zip", min_length=1)
    unpack_dir: Path | None = None
    platt_sigma: float = Field(default=2.0, gt=0.0)
    degenerate_scores: Literal["tie", "reject"] = "tie"


_config: ClassifierConfig | None = None
_config_lock = threading.Lock()


def load_config(config_path: Path | None = None) -> ClassifierConfig:
    """Load configuration from file, return defaults if missing/invalid.

    Args:
        config_path: Optional path to config file. Defaults to default_config_path().

    Returns:
        ClassifierConfig instance with loaded or default values.
    """
    path = config_path or default_config_path()

    if not path.exists():
        logger.debug("Config file not found at %s, using defaults", path)
        return ClassifierConfig()

    try:
        with path.open() as f:
            data: dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in config file %s: %s, using defaults", path, e)
        return ClassifierConfig()
    except OSError as e:
        logger.warning("Cannot read config file %s: %s, using defaults", path, e)
        return ClassifierConfig()

    try:
        return ClassifierConfig.model_validate(data)
    except ValidationError as e:
        logger.warning("Config validation failed: %s, using defaults", e)
        return ClassifierConfig()


def save_config(config: ClassifierConfig, config_path: Path | None = None) -> bool:
    """Save configuration to file.

    Returns:
        True if saved successfully, False otherwise.
    """
    path = config_path or default_config_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)
        logger.debug("Configuration saved to %s", path)
        return True
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        return False


def get_config() -> ClassifierConfig:
    """Get singleton configuration instance.

    Uses double-check locking for thread safety.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = load_config()
    return _config


def reset_config() -> None:
    """Reset singleton configuration for testing."""
    global _config
    with _config_lock:
        _config = None


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_PATH",
    "ClassifierConfig",
    "default_config_path",
    "get_config",
    "load_config",
    "reset_config",
    "save_config",
]
