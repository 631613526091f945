"""Unit tests for the configuration system.

Tests cover defaults, validation bounds, loading from file with fallback on
invalid content, the environment override and the singleton.
"""

import json

import pytest
from pydantic import ValidationError

from textclassifier.config import (
    CONFIG_ENV_VAR,
    CONFIG_PATH,
    ClassifierConfig,
    default_config_path,
    get_config,
    load_config,
    reset_config,
    save_config,
)


class TestClassifierConfig:
    """Tests for ClassifierConfig model."""

    def test_default_values(self):
        config = ClassifierConfig()
        assert config.lexicon_name == "lexicon"
        assert config.model_name == "model"
        assert config.archive_suffix == ".zip"
        assert config.unpack_dir is None
        assert config.platt_sigma == 2.0
        assert config.degenerate_scores == "tie"

    def test_sigma_must_be_positive(self):
        with pytest.raises(ValidationError):
            ClassifierConfig(platt_sigma=0.0)

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            ClassifierConfig(degenerate_scores="ignore")

    def test_empty_artifact_name_rejected(self):
        with pytest.raises(ValidationError):
            ClassifierConfig(lexicon_name="")


class TestLoadConfig:
    """Tests for load_config / save_config."""

    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.json") == ClassifierConfig()

    def test_reads_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"model_name": "weights", "platt_sigma": 1.5}))

        config = load_config(path)
        assert config.model_name == "weights"
        assert config.platt_sigma == 1.5
        assert config.lexicon_name == "lexicon"

    def test_invalid_json_returns_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{ broken")
        assert load_config(path) == ClassifierConfig()

    def test_invalid_values_return_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"platt_sigma": -1}))
        assert load_config(path) == ClassifierConfig()

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = ClassifierConfig(degenerate_scores="reject", unpack_dir=tmp_path / "cache")

        assert save_config(config, path) is True
        assert load_config(path) == config


class TestConfigLocation:
    def test_env_override(self, isolated_config):
        assert default_config_path() == isolated_config

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR)
        assert default_config_path() == CONFIG_PATH


class TestGetConfig:
    def test_singleton(self):
        assert get_config() is get_config()

    def test_reset_reloads(self, isolated_config):
        first = get_config()
        save_config(ClassifierConfig(model_name="other"), isolated_config)
        assert get_config() is first

        reset_config()
        assert get_config().model_name == "other"
