"""Unified exception hierarchy for textclassifier.

All library exceptions inherit from TextClassifierError so callers can catch
one type at the facade boundary while still dispatching on the subclass.

Exception Hierarchy:
    TextClassifierError (base)
    ├── ConfigurationError - Configuration and settings issues
    ├── NotFoundError - Missing resource directory, artifact or classifier key
    ├── ModelLoadError - Corrupt or incompatible lexicon/model data
    ├── InferenceError - Document/model mismatch at classification time
    └── InvalidArgumentError - Out-of-range arguments
        └── DegenerateScoresError - Zero-range score vector under "reject" policy

Usage:
    from textclassifier.errors import NotFoundError, ModelLoadError

    try:
        classifier = resolve("models/news")
    except NotFoundError as e:
        logger.error("Model missing: %s (code: %s)", e.message, e.code)
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standard error codes for textclassifier errors.

    Included in ``to_dict()`` output so front-ends can branch on them.
    """

    # Configuration errors (CFG_*)
    CFG_INVALID = "CFG_INVALID"

    # Resource errors (RES_*)
    RES_NOT_FOUND = "RES_NOT_FOUND"
    RES_ARTIFACT_MISSING = "RES_ARTIFACT_MISSING"
    RES_UNKNOWN_CLASSIFIER = "RES_UNKNOWN_CLASSIFIER"

    # Model errors (MDL_*)
    MDL_LOAD_FAILED = "MDL_LOAD_FAILED"
    MDL_INCOMPATIBLE = "MDL_INCOMPATIBLE"
    MDL_INFERENCE_FAILED = "MDL_INFERENCE_FAILED"
    MDL_NOT_LOADED = "MDL_NOT_LOADED"

    # Validation errors (VAL_*)
    VAL_INVALID_INPUT = "VAL_INVALID_INPUT"
    VAL_OUT_OF_RANGE = "VAL_OUT_OF_RANGE"
    VAL_DEGENERATE_SCORES = "VAL_DEGENERATE_SCORES"

    # Generic errors
    UNKNOWN = "UNKNOWN"


class TextClassifierError(Exception):
    """Base exception for all textclassifier errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code from ErrorCode enum.
        details: Optional additional context about the error.
        cause: Optional original exception that caused this error.
    """

    default_message: str = "An error occurred"
    default_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str | None = None,
        *,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize a textclassifier error.

        Args:
            message: Human-readable error message.
            code: Error code for programmatic handling.
            details: Additional context as key-value pairs.
            cause: Original exception that caused this error.
        """
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        self.cause = cause

        super().__init__(self.message)

        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        parts = [f"{self.__class__.__name__}({self.message!r}"]
        if self.code != self.default_code:
            parts.append(f", code={self.code.value!r}")
        if self.details:
            parts.append(f", details={self.details!r}")
        if self.cause:
            parts.append(f", cause={self.cause!r}")
        parts.append(")")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for CLI/JSON output.

        Returns:
            Dictionary with error, code, and detail fields.
        """
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "detail": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(TextClassifierError):
    """Raised for configuration and settings issues."""

    default_message = "Configuration error"
    default_code = ErrorCode.CFG_INVALID

    def __init__(
        self,
        message: str | None = None,
        *,
        config_key: str | None = None,
        config_path: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        if config_path:
            details["config_path"] = config_path
        super().__init__(message, code=code, details=details, cause=cause)


class NotFoundError(TextClassifierError):
    """Raised when a resource directory, artifact or classifier key is missing.

    Examples:
        - Resource directory does not exist
        - Lexicon or model artifact absent from the directory
        - Lexicon names a classifier that is not registered
    """

    default_message = "Resource not found"
    default_code = ErrorCode.RES_NOT_FOUND

    def __init__(
        self,
        message: str | None = None,
        *,
        path: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, code=code, details=details, cause=cause)


class ModelLoadError(TextClassifierError):
    """Raised when lexicon or model data cannot be loaded.

    Examples:
        - Corrupted model or lexicon artifact
        - Label count in the model disagrees with the lexicon
        - Archive cannot be expanded
    """

    default_message = "Failed to load model"
    default_code = ErrorCode.MDL_LOAD_FAILED

    def __init__(
        self,
        message: str | None = None,
        *,
        model_path: str | None = None,
        classifier_type: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize a model load error.

        Args:
            message: Human-readable error message.
            model_path: Path to the artifact that failed to load.
            classifier_type: Registry key of the classifier being loaded.
            code: Error code for programmatic handling.
            details: Additional context as key-value pairs.
            cause: Original exception that caused this error.
        """
        details = details or {}
        if model_path:
            details["model_path"] = model_path
        if classifier_type:
            details["classifier_type"] = classifier_type
        super().__init__(message, code=code, details=details, cause=cause)


class InferenceError(TextClassifierError):
    """Raised when a document cannot be scored by the loaded model.

    Examples:
        - Document built against a different lexicon
        - Model not loaded yet
        - Model returned a score vector of the wrong length
    """

    default_message = "Classification failed"
    default_code = ErrorCode.MDL_INFERENCE_FAILED


class InvalidArgumentError(TextClassifierError):
    """Raised for argument validation failures."""

    default_message = "Invalid argument"
    default_code = ErrorCode.VAL_INVALID_INPUT

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        value: Any = None,
        expected: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize an invalid argument error.

        Args:
            message: Human-readable error message.
            field: Name of the argument that failed validation.
            value: The invalid value (will be converted to string).
            expected: Description of expected value/format.
            code: Error code for programmatic handling.
            details: Additional context as key-value pairs.
            cause: Original exception that caused this error.
        """
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if expected:
            details["expected"] = expected
        super().__init__(message, code=code, details=details, cause=cause)


class DegenerateScoresError(InvalidArgumentError):
    """Raised when every score is equal and the rescaling range is zero."""

    default_message = "Cannot rescale scores with zero range"
    default_code = ErrorCode.VAL_DEGENERATE_SCORES


# Convenience functions for common error scenarios


def artifact_not_found(kind: str, path: str) -> NotFoundError:
    """Create a NotFoundError for a missing directory or artifact.

    Args:
        kind: What was expected at the path ("Directory", "Lexicon", "Model").
        path: Path where the resource was expected.
    """
    code = ErrorCode.RES_NOT_FOUND if kind == "Directory" else ErrorCode.RES_ARTIFACT_MISSING
    return NotFoundError(f"{kind} {path} does not exist", path=path, code=code)


def unknown_classifier(key: str, known: list[str]) -> NotFoundError:
    """Create a NotFoundError for a classifier key missing from the registry."""
    return NotFoundError(
        f"No classifier registered under {key!r}",
        code=ErrorCode.RES_UNKNOWN_CLASSIFIER,
        details={"classifier_type": key, "known": known},
    )


def ratio_out_of_range(ratio: float) -> InvalidArgumentError:
    """Create an InvalidArgumentError for a ratio-of-best outside (0, 1]."""
    return InvalidArgumentError(
        f"ratio_of_best should be > 0 and <= 1 but got {ratio}",
        field="ratio",
        value=ratio,
        expected="0 < ratio <= 1",
        code=ErrorCode.VAL_OUT_OF_RANGE,
    )


__all__ = [
    "ErrorCode",
    "TextClassifierError",
    "ConfigurationError",
    "NotFoundError",
    "ModelLoadError",
    "InferenceError",
    "InvalidArgumentError",
    "DegenerateScoresError",
    "artifact_not_found",
    "unknown_classifier",
    "ratio_out_of_range",
]
