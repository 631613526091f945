"""Pytest configuration for textclassifier tests.

Provides builders for on-disk resource directories (lexicon + model artifacts)
and isolates every test from the user's configuration file.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np
import pytest

from textclassifier.config import CONFIG_ENV_VAR, reset_config
from textclassifier.lexicon import Lexicon

LABELS = ["sports", "tech", "politics"]
VOCABULARY = ["ball", "goal", "cpu", "code", "vote", "law"]

# One row per label, one column per vocabulary token
LINEAR_WEIGHTS = [
    [1.0, 1.0, 0.0, 0.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 0.0, 1.0, 1.0],
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point the config loader at an empty location and reset the singleton."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_dir / "config.json"))
    reset_config()
    yield config_dir / "config.json"
    reset_config()


def make_lexicon_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "classifier": "linear",
        "labels": list(LABELS),
        "vocabulary": list(VOCABULARY),
        "doc_freq": [4, 2, 3, 3, 1, 1],
        "doc_count": 10,
        "weighting": "occurrences",
        "metadata": {},
    }
    data.update(overrides)
    return data


@pytest.fixture
def lexicon_data() -> Callable[..., dict[str, Any]]:
    """Factory for lexicon JSON payloads with optional overrides."""
    return make_lexicon_data


@pytest.fixture
def lexicon() -> Lexicon:
    return Lexicon.from_dict(make_lexicon_data())


@pytest.fixture
def write_lexicon() -> Callable[..., Path]:
    """Write a lexicon artifact into a directory and return its path."""

    def _write(directory: Path, name: str = "lexicon", **overrides: Any) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(json.dumps(make_lexicon_data(**overrides)), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def linear_model_dir(tmp_path, write_lexicon) -> Path:
    """Resource directory holding a three-label linear model."""
    directory = tmp_path / "news"
    write_lexicon(directory)
    (directory / "model").write_text(
        json.dumps({"weights": LINEAR_WEIGHTS, "bias": [0.0, 0.0, 0.0]}),
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def centroid_model_dir(tmp_path, write_lexicon) -> Path:
    """Resource directory holding a three-label centroid model."""
    directory = tmp_path / "centroids"
    write_lexicon(directory, classifier="centroid")
    with (directory / "model").open("wb") as f:
        np.savez(f, centroids=np.asarray(LINEAR_WEIGHTS))
    return directory
