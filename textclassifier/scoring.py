"""Score interpretation - turn raw score vectors into labels.

Pure functions over a score vector and the lexicon that owns its label order:

- best_label: single label at the maximum score
- best_labels: every label within a ratio of the best after min-max rescaling
- platt_normalisation: sigmoid squashing for variants that want probability-like
  outputs (not used by the two label functions)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Literal

import numpy as np

from textclassifier.config import get_config
from textclassifier.errors import (
    DegenerateScoresError,
    InvalidArgumentError,
    ratio_out_of_range,
)
from textclassifier.lexicon import Lexicon

logger = logging.getLogger(__name__)

DegeneratePolicy = Literal["tie", "reject"]


def _as_scores(scores: Sequence[float] | np.ndarray, lexicon: Lexicon) -> np.ndarray:
    arr = np.asarray(scores, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidArgumentError(
            f"Expected a 1-D score vector, got shape {arr.shape}",
            field="scores",
        )
    if arr.shape[0] != lexicon.label_count:
        raise InvalidArgumentError(
            f"Score vector has {arr.shape[0]} entries but lexicon has "
            f"{lexicon.label_count} labels",
            field="scores",
            expected=f"length {lexicon.label_count}",
        )
    return arr


def best_label(scores: Sequence[float] | np.ndarray, lexicon: Lexicon) -> str:
    """Return the label with the highest score.

    The scan starts from index 0 with a best score of 0.0 and only moves on a
    strictly greater score: among equal maxima the lowest index wins, and a
    vector of all-negative scores yields the label at index 0.
    """
    arr = _as_scores(scores, lexicon)
    best = 0
    best_score = 0.0
    for index, score in enumerate(arr):
        if score > best_score:
            best_score = float(score)
            best = index
    return lexicon.label(best)


def best_labels(
    scores: Sequence[float] | np.ndarray,
    lexicon: Lexicon,
    ratio: float,
    *,
    on_degenerate: DegeneratePolicy | None = None,
) -> list[str]:
    """Return every label whose min-max rescaled score is >= ``ratio``.

    Scores are rescaled to ``(s - min) / (max - min)`` so the best label maps
    to 1.0 and is always kept. Labels come back by descending score, ties in
    ascending index order.

    Args:
        scores: Raw score vector, index-aligned with ``lexicon.labels``.
        lexicon: Lexicon owning the label order.
        ratio: Relative threshold in (0, 1].
        on_degenerate: Policy when every score is equal. "tie" returns all
            labels in index order, "reject" raises DegenerateScoresError.
            Defaults to the configured ``degenerate_scores``.

    Raises:
        InvalidArgumentError: ``ratio`` outside (0, 1], or a malformed or
            non-finite score vector.
        DegenerateScoresError: Zero score range under the "reject" policy.
    """
    if not (0.0 < ratio <= 1.0):
        # also rejects NaN
        raise ratio_out_of_range(ratio)

    arr = _as_scores(scores, lexicon)
    if arr.size == 0:
        raise InvalidArgumentError("Cannot pick labels from an empty score vector", field="scores")
    if not np.isfinite(arr).all():
        raise InvalidArgumentError(
            "Score vector contains NaN or infinite values",
            field="scores",
            expected="finite scores",
        )

    low = float(arr.min())
    high = float(arr.max())

    if high == low:
        policy = on_degenerate or get_config().degenerate_scores
        if policy == "reject":
            raise DegenerateScoresError(details={"score": high, "labels": lexicon.label_count})
        logger.debug("All %d scores equal %.4f, keeping every label", arr.size, high)
        return list(lexicon.labels)

    scale = high - low
    if math.isfinite(scale):
        rescaled = (arr - low) / scale
    else:
        # range exceeds float64; halving is exact and keeps it finite
        rescaled = (arr / 2.0 - low / 2.0) / (high / 2.0 - low / 2.0)
    rescaled[arr == high] = 1.0

    kept = [i for i in range(arr.size) if rescaled[i] >= ratio]
    kept.sort(key=lambda i: (-rescaled[i], i))
    return [lexicon.label(i) for i in kept]


def platt_normalisation(x: float | np.ndarray, sigma: float | None = None) -> float | np.ndarray:
    """Squash raw scores into (0, 1) with ``1 / (1 + exp(-sigma * x))``.

    Large-magnitude inputs saturate toward 0 or 1 without overflow.

    Args:
        x: Scalar or array of raw scores.
        sigma: Steepness. Defaults to the configured ``platt_sigma`` (2.0).
    """
    if sigma is None:
        sigma = get_config().platt_sigma

    if isinstance(x, np.ndarray):
        z = sigma * x.astype(np.float64)
        out = np.empty_like(z)
        pos = z >= 0
        out[pos] = 1.0 / (1.0 + np.exp(-z[pos]))
        ez = np.exp(z[~pos])
        out[~pos] = ez / (1.0 + ez)
        return out

    z = sigma * float(x)
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    ez = math.exp(z)
    return ez / (1.0 + ez)


__all__ = ["DegeneratePolicy", "best_label", "best_labels", "platt_normalisation"]
