"""
Closed-form and heuristic breakpoint strategies.

Equal-interval, quantile and 1-D k-means breaks, plus ``fixed_breaks`` for
splitting a sequence at known positions.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import numpy as np

from ..config import config
from ._validation import (
    InvalidArgumentError,
    as_finite_array,
    check_class_count,
    check_int,
    check_integer,
    split_missing,
)
from .backtrack import freeze


def equal_breaks(data: Any, k: int) -> np.ndarray:
    """
    Equal-interval breaks: the data range divided into *k* intervals of equal width.

    Equivalent to ``classIntervals(style="equal")``. When every value is the
    same the result is ``[value, value]``.

    Args:
        data: Observations
        k: Number of classes (>= 1)

    Returns:
        Read-only array of k+1 breakpoints

    Raises:
        InvalidArgumentError: If data is empty or k < 1
    """
    x = as_finite_array(data)
    k = check_class_count(k, minimum=1)
    low, high = float(x.min()), float(x.max())
    if low == high:
        return freeze(np.array([low, high]))
    width = (high - low) / k
    return freeze(np.array([low + width * i for i in range(k + 1)]))


def quantile_breaks(data: Any, k: int) -> np.ndarray:
    """
    Quantile breaks at probabilities ``0, 1/k, ..., 1`` (linear interpolation).

    The ends are pinned to the data minimum and maximum and repeated
    breakpoints are removed, so heavily tied data can yield fewer than k+1.
    """
    x = as_finite_array(data)
    k = check_class_count(k, minimum=1)
    breaks = np.quantile(x, np.linspace(0.0, 1.0, k + 1))
    breaks[0] = x.min()
    breaks[-1] = x.max()
    return freeze(np.unique(breaks))


# ------------------------------------------------------------------
# 1-D k-means
# ------------------------------------------------------------------

def _kmeanspp_init(x: np.ndarray, K: int, rng: np.random.Generator) -> np.ndarray:
    """Return K initial centers chosen by the k-means++ rule."""
    n = x.size
    centers = np.empty(K, dtype=np.float64)
    centers[0] = x[int(rng.integers(0, n))]
    for k in range(1, K):
        sq = (x[:, None] - centers[None, :k]) ** 2  # (n, k)
        min_sq = sq.min(axis=1)
        total = min_sq.sum()
        if total == 0.0:
            centers[k] = x[int(rng.integers(0, n))]
        else:
            centers[k] = x[int(rng.choice(n, p=min_sq / total))]
    return centers


def _assign(x: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Index of the nearest center for every value."""
    return np.argmin((x[:, None] - centers[None, :]) ** 2, axis=1)


def _kmeans_1d(
    x: np.ndarray, K: int, *, max_iter: int, seed: int
) -> tuple[np.ndarray, float]:
    rng = np.random.default_rng(seed)
    centers = _kmeanspp_init(x, K, rng)
    labels = _assign(x, centers)
    for _ in range(max_iter):
        for j in range(K):
            members = x[labels == j]
            if members.size:
                centers[j] = members.mean()
        new_labels = _assign(x, centers)
        if np.array_equal(new_labels, labels):
            break
        labels = new_labels
    wcss = float(np.sum((x - centers[labels]) ** 2))
    return centers, wcss


def kmeans_breaks(
    data: Any,
    k: int,
    *,
    restarts: Optional[int] = None,
    max_iter: Optional[int] = None,
    seed: int = 0,
) -> np.ndarray:
    """
    Breaks from 1-D k-means cluster centers.

    Runs k-means (k-means++ seeding) *restarts* times with seeds
    ``seed, seed + 1, ...`` and keeps the run with the lowest within-cluster
    sum of squares. The breaks are the sorted centers framed by the data
    minimum and maximum, with duplicates removed.

    Args:
        data: Observations
        k: Number of classes (>= 2)
        restarts: Number of random starts (default: ``CLASS_BREAKS_KMEANS_RESTARTS``)
        max_iter: Iteration cap per run (default: ``CLASS_BREAKS_KMEANS_MAX_ITER``)
        seed: Base random seed

    Returns:
        Read-only breakpoint array; the sorted distinct values when there
        are no more distinct values than classes
    """
    x = as_finite_array(data)
    k = check_class_count(k)
    restarts = config.kmeans.restarts if restarts is None else check_int(restarts, "restarts", 1)
    max_iter = config.kmeans.max_iter if max_iter is None else check_int(max_iter, "max_iter", 1)

    distinct = np.unique(x)
    if distinct.size <= k:
        return freeze(distinct)

    best_wcss = np.inf
    best_centers = None
    for restart_idx in range(restarts):
        centers, wcss = _kmeans_1d(x, k, max_iter=max_iter, seed=seed + restart_idx)
        if wcss < best_wcss:
            best_wcss = wcss
            best_centers = centers

    breaks = np.concatenate([[x.min()], np.sort(best_centers), [x.max()]])
    return freeze(np.unique(breaks))


def fixed_breaks(values: Sequence[Any], positions: Sequence[int]) -> List[np.ndarray]:
    """
    Split *values* into consecutive segments ending at the given positions.

    Missing values (``None``) are dropped first. Positions are 1-based
    counts of elements before each split and are sorted automatically, so
    ``positions=[3, 7]`` on ten values gives segments of 3, 4 and 3 values.

    Raises:
        InvalidArgumentError: If a position is not an integer or is outside
            ``1..len(clean values)``
    """
    clean = np.asarray([v for v in split_missing(values) if v is not None], dtype=np.float64)
    cuts = sorted(check_integer(p, "break index") for p in positions)
    if any(p < 1 or p > clean.size for p in cuts):
        raise InvalidArgumentError("Break indices must be within the range of the vector.")
    edges = [0] + cuts + [clean.size]
    return [clean[a:b] for a, b in zip(edges[:-1], edges[1:])]
