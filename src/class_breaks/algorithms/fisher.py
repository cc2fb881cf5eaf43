"""
Fisher-Jenks natural breaks by exact optimization.

Finds the partition of n sorted values into k contiguous classes that
minimizes the total within-class sum of squared deviations, using Fisher's
dynamic program.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import numpy as np

from ..utils.logging_config import get_logger
from ._validation import (
    InvalidArgumentError,
    as_finite_array,
    check_class_count,
    check_sorted,
    check_sum_of_squares,
    distinct_count,
)
from .backtrack import (
    ClassSummary,
    backtrack_starts,
    breaks_from_starts,
    degenerate_breaks,
    freeze,
    summarize_classes,
)

logger = get_logger(__name__)

FLOAT_MAX = np.finfo(np.float64).max


@dataclass
class FisherClustering:
    """Tables and class layout produced by one optimizer run."""

    cost: np.ndarray
    index: np.ndarray
    starts: np.ndarray
    summaries: List[ClassSummary] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        """Within-class sum of squares of the optimal k-class partition."""
        return float(self.cost[-1, -1])


# ------------------------------------------------------------------
# Row kernel (shared with the parallel optimizer)
# ------------------------------------------------------------------

def _suffix_ss(x: np.ndarray, row: int) -> np.ndarray:
    """
    Sum of squared deviations of every run ``x[s..row]``, for s = row..0.

    Entry t describes the run starting at ``row - t``. Sums are accumulated
    over ``x[row], x[row-1], ...`` in that order, so every entry matches a
    scalar running-sum loop bit for bit.
    """
    seg = x[row::-1]
    sums = np.cumsum(seg)
    sums_sq = np.cumsum(seg * seg)
    counts = np.arange(1, row + 2, dtype=np.float64)
    return sums_sq - sums * sums / counts


def _best_starts(ss: np.ndarray, prev: np.ndarray, row: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pick the optimal last-class start for one row and one or more columns.

    Args:
        ss: Output of ``_suffix_ss(x, row)``
        prev: ``(n, c)`` costs for one fewer class; only rows ``< row`` are read
        row: Row being filled

    Returns:
        ``(cost, start)`` arrays of length c. Candidates are scanned from
        start ``row`` down to 1 and a candidate replaces the current best
        when it is less than or equal to it, so among equal totals the
        smallest start wins. Totals above the float64 maximum never
        replace the initial value.
    """
    n_cols = prev.shape[1]
    if row == 0:
        return np.full(n_cols, FLOAT_MAX), np.zeros(n_cols, dtype=np.intp)
    with np.errstate(over="ignore"):
        totals = ss[:row, None] + prev[row - 1::-1]
    best = totals.min(axis=0)
    last = row - 1 - np.argmin(totals[::-1], axis=0)
    reachable = best <= FLOAT_MAX
    cost = np.where(reachable, best, FLOAT_MAX)
    start = np.where(reachable, row - last, 0).astype(np.intp)
    return cost, start


def _validate_sorted_input(sorted_values: Any, k: Any) -> Tuple[np.ndarray, int]:
    x = as_finite_array(sorted_values, name="sorted_values")
    check_sorted(x)
    k = check_class_count(k)
    n_distinct = distinct_count(x)
    if k >= n_distinct:
        raise InvalidArgumentError(
            f"class count ({k}) must be less than the number of distinct values ({n_distinct})"
        )
    check_sum_of_squares(x, name="sorted_values")
    return x, k


def _degenerate_fallback(x: np.ndarray, k: int) -> Optional[np.ndarray]:
    """Sorted distinct values when there are no more of them than classes, else None."""
    n_distinct = distinct_count(x)
    if n_distinct > k:
        return None
    logger.warning(
        "Number of unique values (%d) is less than or equal to the number of classes (%d); "
        "returning the distinct values as breaks",
        n_distinct,
        k,
    )
    return freeze(degenerate_breaks(x))


def _fill_tables(x: np.ndarray, k: int) -> Tuple[np.ndarray, np.ndarray]:
    n = x.size
    cost = np.full((n, k), FLOAT_MAX)
    index = np.zeros((n, k), dtype=np.intp)
    for row in range(n):
        ss = _suffix_ss(x, row)
        cost[row, 1:], index[row, 1:] = _best_starts(ss, cost[:, : k - 1], row)
        cost[row, 0] = ss[-1]
        index[row, 0] = 0
    return cost, index


def fisher_clustering(sorted_values: Any, k: int) -> FisherClustering:
    """
    Run Fisher's exact optimization on sorted data.

    Row r, column c of the tables describes the first r+1 values split into
    c+1 classes: ``cost`` holds the minimal within-class sum of squares and
    ``index`` the 0-based start of the last class.

    Args:
        sorted_values: Data sorted in ascending order
        k: Number of classes (2 <= k < number of distinct values)

    Returns:
        FisherClustering with the tables, class starts and class summaries

    Raises:
        InvalidArgumentError: If the data is empty, unsorted, non-finite or
            too large to square without overflow, or k is out of range
    """
    x, k = _validate_sorted_input(sorted_values, k)
    t0 = time.perf_counter()
    cost, index = _fill_tables(x, k)
    logger.debug(
        "Built Fisher tables n=%d k=%d in %.3fs", x.size, k, time.perf_counter() - t0
    )
    starts = backtrack_starts(index, k)
    return FisherClustering(
        cost=cost,
        index=index,
        starts=starts,
        summaries=summarize_classes(x, starts),
    )


def fisher_breaks(data: Any, k: int) -> np.ndarray:
    """
    Fisher natural breaks for a sequence of values.

    The caller's sequence is copied and sorted; it is never modified.
    When the data has no more distinct values than *k* the optimizer is
    skipped and the sorted distinct values are returned instead (so the
    result is shorter than k+1).

    Args:
        data: Observations (any order)
        k: Number of classes

    Returns:
        Read-only array ``[min, k-1 interior breaks, max]``

    Raises:
        InvalidArgumentError: If data is empty or non-finite, k < 2, or the
            values are so large that their sum of squares overflows

    Example:
        breaks = fisher_breaks([10, 12, 15, 18, 20, 22, 25, 28, 30, 35, 40, 45], 3)
        labels = classify(values, breaks)
    """
    x = as_finite_array(data)
    k = check_class_count(k)
    fallback = _degenerate_fallback(x, k)
    if fallback is not None:
        return fallback

    check_sum_of_squares(x)
    sorted_x = np.sort(x)
    t0 = time.perf_counter()
    _, index = _fill_tables(sorted_x, k)
    logger.debug(
        "fisher_breaks n=%d k=%d took %.3fs", sorted_x.size, k, time.perf_counter() - t0
    )
    return freeze(breaks_from_starts(sorted_x, backtrack_starts(index, k)))
