"""
Interval assignment for breakpoint vectors.

Maps observations to classes with the boundary convention of R's
``classInt``/``findInterval``:

- values at or below the first breakpoint go to class 1;
- values strictly between breakpoints j-1 and j go to class j;
- a value exactly equal to an interior breakpoint ``breaks[j]`` goes to the
  higher class j+1, not class j;
- values at or beyond the last breakpoint go to the last class, or to the
  overflow class m (m = number of breakpoints) when they exceed
  ``max + multiplier * (max - min) / class_count``.

Both output forms (class numbers and display strings) come from ``locate``.
"""

from __future__ import annotations

from typing import Any, List, NamedTuple, Optional, Sequence

import numpy as np

from ..config import config
from ._validation import (
    InvalidArgumentError,
    check_breakpoints,
    check_class_count,
    split_missing,
)

MISSING_INDEX = 0
MISSING_LABEL = "Missing"

OUTPUT_FORMS = ("index", "label")


class Placement(NamedTuple):
    """Where one observation falls relative to a breakpoint vector."""

    kind: str  # "missing", "first", "interior", "top" or "overflow"
    index: int


def extreme_threshold(
    breaks: Sequence[float], class_count: int, multiplier: float
) -> float:
    """Value above which an observation is assigned the overflow class."""
    low, high = breaks[0], breaks[-1]
    return high + multiplier * ((high - low) / class_count)


def locate(value: Optional[float], breaks: Sequence[float], threshold: float) -> Placement:
    """
    Decide the class of a single observation.

    Args:
        value: Observation, or ``None`` for missing
        breaks: Sorted breakpoints (at least two)
        threshold: Overflow threshold from ``extreme_threshold``

    Returns:
        Placement with a 1-based class index (0 for missing)
    """
    if value is None:
        return Placement("missing", MISSING_INDEX)
    m = len(breaks)
    if value <= breaks[0]:
        return Placement("first", 1)
    for j in range(1, m):
        if breaks[j - 1] < value < breaks[j]:
            return Placement("interior", j)
        if value == breaks[j] and j < m - 1:
            return Placement("interior", j + 1)
    if value > threshold:
        return Placement("overflow", m)
    return Placement("top", m - 1)


def _fmt(value: float) -> str:
    return str(float(value))


def describe(placement: Placement, breaks: Sequence[float]) -> str:
    """Display string for a placement."""
    if placement.kind == "missing":
        return MISSING_LABEL
    if placement.kind == "first":
        return f"≤ {_fmt(breaks[0])}"
    if placement.kind == "interior":
        j = placement.index
        return f"{_fmt(breaks[j - 1])} - {_fmt(breaks[j])}"
    return f"> {_fmt(breaks[-2])}"


def _placements(
    data: Sequence[Any],
    breaks: Any,
    class_count: Optional[int],
    extreme_multiplier: Optional[float],
) -> tuple[List[Placement], List[float]]:
    b = check_breakpoints(breaks).tolist()
    values = split_missing(data)
    if class_count is None:
        class_count = len(b) - 1
    else:
        class_count = check_class_count(class_count, minimum=1)
    if extreme_multiplier is None:
        extreme_multiplier = config.classifier.extreme_multiplier
    else:
        try:
            extreme_multiplier = float(extreme_multiplier)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                f"extreme_multiplier must be a number, got {extreme_multiplier!r}"
            ) from e
        if not np.isfinite(extreme_multiplier) or extreme_multiplier < 0:
            raise InvalidArgumentError(
                f"extreme_multiplier must be a finite number >= 0, got {extreme_multiplier!r}"
            )
    threshold = extreme_threshold(b, class_count, extreme_multiplier)
    return [locate(v, b, threshold) for v in values], b


def classify_indices(
    data: Sequence[Any],
    breaks: Any,
    *,
    class_count: Optional[int] = None,
    extreme_multiplier: Optional[float] = None,
) -> np.ndarray:
    """
    Class number for each observation, in input order.

    Args:
        data: Observations; ``None`` marks a missing value
        breaks: Sorted breakpoint vector (length m >= 2)
        class_count: Class count used for the overflow threshold
            (default: ``len(breaks) - 1``)
        extreme_multiplier: Overflow threshold multiplier
            (default: ``CLASS_BREAKS_EXTREME_MULTIPLIER``)

    Returns:
        Integer array: 0 for missing, 1..m-1 for classes, m for overflow

    Raises:
        InvalidArgumentError: For malformed breakpoints or non-finite data
    """
    placements, _ = _placements(data, breaks, class_count, extreme_multiplier)
    return np.array([p.index for p in placements], dtype=int)


def cut_data(
    data: Sequence[Any],
    breaks: Any,
    *,
    class_count: Optional[int] = None,
    extreme_multiplier: Optional[float] = None,
) -> List[str]:
    """
    Display label for each observation, in input order.

    Labels are ``"Missing"``, ``"≤ {first}"``, ``"{lower} - {upper}"`` and
    ``"> {penultimate}"`` for values at or beyond the last breakpoint.
    """
    placements, b = _placements(data, breaks, class_count, extreme_multiplier)
    return [describe(p, b) for p in placements]


def classify(
    data: Sequence[Any],
    breaks: Any,
    *,
    output: str = "index",
    class_count: Optional[int] = None,
    extreme_multiplier: Optional[float] = None,
):
    """
    Assign observations to the classes defined by *breaks*.

    Args:
        data: Observations in any order; ``None`` marks a missing value
        breaks: Sorted breakpoint vector
        output: ``"index"`` for class numbers or ``"label"`` for display strings
        class_count: See ``classify_indices``
        extreme_multiplier: See ``classify_indices``

    Returns:
        ``np.ndarray`` of ints for ``"index"``, ``list[str]`` for ``"label"``

    Raises:
        InvalidArgumentError: Unknown output form, malformed breakpoints or
            non-finite data
    """
    if output == "index":
        return classify_indices(
            data, breaks, class_count=class_count, extreme_multiplier=extreme_multiplier
        )
    if output == "label":
        return cut_data(
            data, breaks, class_count=class_count, extreme_multiplier=extreme_multiplier
        )
    raise InvalidArgumentError(f"output must be one of {OUTPUT_FORMS}, got {output!r}")
