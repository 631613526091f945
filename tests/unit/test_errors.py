"""Unit tests for the textclassifier exception hierarchy."""

import pytest

from textclassifier.errors import (
    ConfigurationError,
    DegenerateScoresError,
    ErrorCode,
    InferenceError,
    InvalidArgumentError,
    ModelLoadError,
    NotFoundError,
    TextClassifierError,
    artifact_not_found,
    ratio_out_of_range,
    unknown_classifier,
)


class TestErrorCode:
    def test_error_code_values_are_unique(self):
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))

    def test_error_code_categories(self):
        for code in ErrorCode:
            if code == ErrorCode.UNKNOWN:
                continue
            assert any(code.value.startswith(prefix) for prefix in ["CFG_", "RES_", "MDL_", "VAL_"])


class TestTextClassifierError:
    def test_default_message(self):
        error = TextClassifierError()
        assert error.message == "An error occurred"
        assert str(error) == "An error occurred"
        assert error.code == ErrorCode.UNKNOWN

    def test_cause_is_chained(self):
        cause = OSError("disk")
        error = ModelLoadError("boom", cause=cause)
        assert error.__cause__ is cause
        assert error.cause is cause

    def test_repr_includes_details(self):
        error = NotFoundError("gone", path="/tmp/x")
        text = repr(error)
        assert "NotFoundError('gone'" in text
        assert "/tmp/x" in text

    def test_to_dict(self):
        error = InvalidArgumentError("bad", field="ratio", value=2)
        assert error.to_dict() == {
            "error": "InvalidArgumentError",
            "code": "VAL_INVALID_INPUT",
            "detail": "bad",
            "details": {"field": "ratio", "value": "2"},
        }

    @pytest.mark.parametrize(
        "cls",
        [
            ConfigurationError,
            NotFoundError,
            ModelLoadError,
            InferenceError,
            InvalidArgumentError,
            DegenerateScoresError,
        ],
    )
    def test_all_inherit_from_base(self, cls):
        assert issubclass(cls, TextClassifierError)
        with pytest.raises(TextClassifierError):
            raise cls()

    def test_degenerate_is_invalid_argument(self):
        assert issubclass(DegenerateScoresError, InvalidArgumentError)
        assert DegenerateScoresError().code == ErrorCode.VAL_DEGENERATE_SCORES


class TestModelLoadError:
    def test_details(self):
        error = ModelLoadError("x", model_path="/m", classifier_type="linear")
        assert error.details == {"model_path": "/m", "classifier_type": "linear"}
        assert error.code == ErrorCode.MDL_LOAD_FAILED


class TestConvenienceFunctions:
    def test_artifact_not_found_directory(self):
        error = artifact_not_found("Directory", "/models/x")
        assert error.code == ErrorCode.RES_NOT_FOUND
        assert error.message == "Directory /models/x does not exist"
        assert error.details["path"] == "/models/x"

    def test_artifact_not_found_file(self):
        error = artifact_not_found("Model", "/models/x/model")
        assert error.code == ErrorCode.RES_ARTIFACT_MISSING

    def test_unknown_classifier(self):
        error = unknown_classifier("nb", ["linear"])
        assert isinstance(error, NotFoundError)
        assert error.details == {"classifier_type": "nb", "known": ["linear"]}

    def test_ratio_out_of_range(self):
        error = ratio_out_of_range(1.5)
        assert error.code == ErrorCode.VAL_OUT_OF_RANGE
        assert "1.5" in error.message
