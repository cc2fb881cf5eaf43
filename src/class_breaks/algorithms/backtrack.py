"""
Breakpoint extraction from completed Fisher tables.

Walks the index table backwards from the last row to recover the start of
every class, turns the starts into a breakpoint vector and computes
per-class summary statistics.
"""

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from functools import reduce
from typing import List, NamedTuple, Optional

import numpy as np


@dataclass(frozen=True)
class ClassSummary:
    """Summary statistics of one class (population standard deviation)."""

    minimum: float
    maximum: float
    mean: float
    std: float
    size: int


class _Partial(NamedTuple):
    minimum: float
    maximum: float
    total: float
    total_sq: float
    count: int


def backtrack_starts(index: np.ndarray, k: int) -> np.ndarray:
    """
    Recover the 0-based start position of each class.

    Starting from the last row, ``start[c] = index[row, c]`` and the walk
    continues at the row just before that start. Each step depends on the
    previous one, so this is always sequential.

    Args:
        index: ``(n, k_total)`` index table with ``k_total >= k``
        k: Number of classes to recover

    Returns:
        Integer array of length *k*; ``start[0]`` is always 0
    """
    starts = np.empty(k, dtype=np.intp)
    row = index.shape[0] - 1
    for col in range(k - 1, -1, -1):
        starts[col] = index[row, col]
        row = int(starts[col]) - 1
    return starts


def breaks_from_starts(sorted_values: np.ndarray, starts: np.ndarray) -> np.ndarray:
    """Build ``[min, sorted[start[1]], ..., sorted[start[k-1]], max]``."""
    k = len(starts)
    breaks = np.empty(k + 1, dtype=np.float64)
    breaks[0] = sorted_values[0]
    breaks[k] = sorted_values[-1]
    breaks[1:k] = sorted_values[starts[1:]]
    return breaks


def extract_breaks(sorted_values: np.ndarray, index: np.ndarray, k: int) -> np.ndarray:
    """Backtrack *index* and return the k+1 breakpoints of the optimal partition."""
    return breaks_from_starts(sorted_values, backtrack_starts(index, k))


def degenerate_breaks(values: np.ndarray) -> np.ndarray:
    """Breakpoints for input with no more distinct values than classes."""
    return np.unique(values).astype(np.float64)


def freeze(breaks: np.ndarray) -> np.ndarray:
    """Mark a breakpoint vector read-only before handing it to the caller."""
    breaks.flags.writeable = False
    return breaks


# ------------------------------------------------------------------
# Class summaries
# ------------------------------------------------------------------

def _partial_stats(values: np.ndarray) -> _Partial:
    return _Partial(
        minimum=float(values.min()),
        maximum=float(values.max()),
        total=float(values.sum()),
        total_sq=float(np.dot(values, values)),
        count=int(values.size),
    )


def _combine(a: _Partial, b: _Partial) -> _Partial:
    return _Partial(
        minimum=min(a.minimum, b.minimum),
        maximum=max(a.maximum, b.maximum),
        total=a.total + b.total,
        total_sq=a.total_sq + b.total_sq,
        count=a.count + b.count,
    )


def _finish(p: _Partial) -> ClassSummary:
    mean = p.total / p.count
    var = p.total_sq / p.count - mean * mean
    return ClassSummary(
        minimum=p.minimum,
        maximum=p.maximum,
        mean=mean,
        std=float(np.sqrt(abs(var))),
        size=p.count,
    )


def summarize_classes(
    sorted_values: np.ndarray,
    starts: np.ndarray,
    *,
    threshold: Optional[int] = None,
    executor: Optional[Executor] = None,
    n_parts: int = 1,
) -> List[ClassSummary]:
    """
    Compute min, max, mean and std for each class, in ascending class order.

    Classes with more than *threshold* members are split into *n_parts*
    contiguous sub-ranges whose partial accumulators are computed on
    *executor* and then combined in sub-range order. Min and max do not
    depend on that order; sums agree with the sequential result up to
    floating-point rounding.

    Args:
        sorted_values: Sorted data the starts refer to
        starts: 0-based start position of each class
        threshold: Minimum class size for the parallel reduction; ``None``
            disables it
        executor: Pool used for the parallel reduction
        n_parts: Number of sub-ranges per large class

    Returns:
        One ``ClassSummary`` per class
    """
    n = sorted_values.size
    bounds = list(starts) + [n]
    summaries: List[ClassSummary] = []
    for c in range(len(starts)):
        lo, hi = int(bounds[c]), int(bounds[c + 1])
        values = sorted_values[lo:hi]
        if executor is not None and threshold is not None and values.size > threshold and n_parts > 1:
            pieces = np.array_split(values, n_parts)
            futures = [executor.submit(_partial_stats, p) for p in pieces if p.size]
            partial = reduce(_combine, [f.result() for f in futures])
        else:
            partial = _partial_stats(values)
        summaries.append(_finish(partial))
    return summaries
