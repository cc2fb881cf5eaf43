"""Input checks shared by the public breakpoint and classification entry points.

Every public function validates once, up front, and raises
``InvalidArgumentError`` before any table is allocated.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, List, Optional, Sequence

import numpy as np


class InvalidArgumentError(ValueError):
    """Raised when an input cannot be optimized or classified."""


def as_finite_array(data: Any, name: str = "data") -> np.ndarray:
    """Return a 1-D float64 copy of *data*, rejecting empty or non-finite input."""
    try:
        x = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must contain only real numbers: {e}") from e
    if x.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1-D, got shape {x.shape}")
    if x.size == 0:
        raise InvalidArgumentError(f"{name} cannot be empty")
    if not np.all(np.isfinite(x)):
        raise InvalidArgumentError(f"{name} contains NaN or infinite values")
    return x


def check_sum_of_squares(x: np.ndarray, name: str = "data") -> None:
    """
    Reject values whose running sums would overflow float64.

    ``n * sum(x**2)`` bounds both the sum of squares and the squared sum of
    any run, so a finite bound keeps every variance term finite.
    """
    with np.errstate(over="ignore"):
        bound = float(np.dot(x, x)) * x.size
    if not np.isfinite(bound):
        raise InvalidArgumentError(
            f"{name} values are too large in magnitude; their sum of squares overflows float64"
        )


def check_integer(value: Any, name: str) -> int:
    """Validate that *value* is an integer (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    return int(value)


def check_int(value: Any, name: str, minimum: int) -> int:
    """Validate an integer argument with a lower bound."""
    value = check_integer(value, name)
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}")
    return value


def check_class_count(k: Any, minimum: int = 2) -> int:
    """Validate a requested number of classes."""
    return check_int(k, "class count", minimum)


def distinct_count(x: np.ndarray) -> int:
    return int(np.unique(x).size)


def check_sorted(x: np.ndarray, name: str = "sorted_values") -> None:
    if x.size > 1 and np.any(x[1:] < x[:-1]):
        raise InvalidArgumentError(f"{name} must be sorted in ascending order")


def check_breakpoints(breaks: Any) -> np.ndarray:
    """Validate a breakpoint vector: at least two finite, non-decreasing values."""
    try:
        b = np.array(breaks, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"breakpoints must be real numbers: {e}") from e
    if b.ndim != 1 or b.size < 2:
        raise InvalidArgumentError(
            f"At least 2 break points are required, got {b.size if b.ndim == 1 else b.shape}"
        )
    if not np.all(np.isfinite(b)):
        raise InvalidArgumentError("breakpoints contain NaN or infinite values")
    check_sorted(b, name="breakpoints")
    return b


def split_missing(data: Sequence[Any]) -> List[Optional[float]]:
    """
    Convert observations to floats, keeping ``None`` as the missing sentinel.

    Raises:
        InvalidArgumentError: For non-numeric or non-finite observations
    """
    if isinstance(data, np.ndarray) and data.ndim != 1:
        raise InvalidArgumentError(f"data must be 1-D, got shape {data.shape}")
    values: List[Optional[float]] = []
    for i, item in enumerate(data):
        if item is None:
            values.append(None)
            continue
        if isinstance(item, (str, bytes)):
            raise InvalidArgumentError(f"data[{i}] is not a real number: {item!r}")
        try:
            value = float(item)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"data[{i}] is not a real number: {item!r}") from e
        if not np.isfinite(value):
            raise InvalidArgumentError(f"data[{i}] is not finite: {item!r}")
        values.append(value)
    return values


def drop_missing(data: Sequence[Any]) -> np.ndarray:
    """Return the non-missing observations of *data* as a float64 array."""
    present = [v for v in split_missing(data) if v is not None]
    if not present:
        raise InvalidArgumentError("Input contains no non-missing values")
    return np.asarray(present, dtype=np.float64)
