"""Unit tests for stale-model detection."""

import logging
import os

from textclassifier.freshness import lexicon_mtime, needs_refresh
from textclassifier.resolver import resolve


def _bump_mtime(path, delta_ns=2_000_000_000):
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + delta_ns))


class TestLexiconMtime:
    def test_returns_nanoseconds(self, linear_model_dir):
        expected = (linear_model_dir / "lexicon").stat().st_mtime_ns
        assert lexicon_mtime(linear_model_dir, "lexicon") == expected

    def test_missing_returns_none(self, tmp_path):
        assert lexicon_mtime(tmp_path, "lexicon") is None


class TestNeedsRefresh:
    """Tests for needs_refresh and TextClassifier.needs_refreshing."""

    def test_fresh_after_resolve(self, linear_model_dir):
        classifier = resolve(linear_model_dir)
        assert needs_refresh(classifier) is False
        assert classifier.needs_refreshing() is False

    def test_stale_after_newer_lexicon(self, linear_model_dir):
        classifier = resolve(linear_model_dir)
        _bump_mtime(linear_model_dir / "lexicon")
        assert needs_refresh(classifier) is True

    def test_stale_after_older_lexicon(self, linear_model_dir):
        """Any mismatch counts, not only newer files."""
        classifier = resolve(linear_model_dir)
        _bump_mtime(linear_model_dir / "lexicon", delta_ns=-2_000_000_000)
        assert needs_refresh(classifier) is True

    def test_model_change_alone_is_not_tracked(self, linear_model_dir):
        """Only the lexicon artifact is watched."""
        classifier = resolve(linear_model_dir)
        _bump_mtime(linear_model_dir / "model")
        assert needs_refresh(classifier) is False

    def test_deleted_lexicon_is_stale(self, linear_model_dir, caplog):
        classifier = resolve(linear_model_dir)
        (linear_model_dir / "lexicon").unlink()

        with caplog.at_level(logging.WARNING, logger="textclassifier.freshness"):
            assert needs_refresh(classifier) is True
        assert "stale" in caplog.text

    def test_does_not_reload(self, linear_model_dir):
        classifier = resolve(linear_model_dir)
        lexicon = classifier.lexicon
        _bump_mtime(linear_model_dir / "lexicon")

        needs_refresh(classifier)
        assert classifier.lexicon is lexicon
