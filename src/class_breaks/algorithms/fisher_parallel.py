"""
Thread-parallel Fisher optimizer.

Produces exactly the same tables and breakpoints as ``fisher.fisher_clustering``
by running the same per-cell kernel under a column barrier:

- column c of any row depends only on column c-1 of earlier rows;
- rows are split into contiguous chunks, one per worker;
- for each column, every worker fills its own rows from a read-only view of
  the finished column c-1 and returns owned result arrays;
- the coordinator waits for all chunks, writes the disjoint row ranges into
  column c, and only then starts column c+1.

No worker ever reads a cell that is still being computed.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Tuple

import numpy as np

from ..config import config
from ..utils.logging_config import get_logger
from ._validation import (
    as_finite_array,
    check_class_count,
    check_int,
    check_sum_of_squares,
)
from .backtrack import (
    backtrack_starts,
    breaks_from_starts,
    freeze,
    summarize_classes,
)
from .fisher import (
    FLOAT_MAX,
    FisherClustering,
    _best_starts,
    _degenerate_fallback,
    _suffix_ss,
    _validate_sorted_input,
)

logger = get_logger(__name__)

RowRange = Tuple[int, int]


def row_chunks(n: int, n_workers: int) -> List[RowRange]:
    """Split rows ``0..n-1`` into at most *n_workers* contiguous ranges."""
    n_chunks = max(1, min(n_workers, n))
    edges = np.linspace(0, n, n_chunks + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def _fill_chunk(
    x: np.ndarray, rows: RowRange, col: int, prev: Optional[np.ndarray]
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute column *col* for a row range.

    Args:
        x: Sorted data (read only)
        rows: ``(start, stop)`` row range owned by this task
        col: Column being filled
        prev: Read-only ``(n, 1)`` view of column ``col - 1``; ``None`` for col 0

    Returns:
        ``(cost, start)`` arrays for the rows in the range
    """
    lo, hi = rows
    cost = np.empty(hi - lo, dtype=np.float64)
    start = np.empty(hi - lo, dtype=np.intp)
    for i, row in enumerate(range(lo, hi)):
        # Running accumulators restart for every row
        ss = _suffix_ss(x, row)
        if prev is None:
            cost[i], start[i] = ss[-1], 0
        else:
            c, s = _best_starts(ss, prev, row)
            cost[i], start[i] = c[0], s[0]
    return cost, start


def _fill_tables_parallel(
    x: np.ndarray, k: int, chunks: List[RowRange], executor: ThreadPoolExecutor
) -> Tuple[np.ndarray, np.ndarray]:
    n = x.size
    cost = np.full((n, k), FLOAT_MAX)
    index = np.zeros((n, k), dtype=np.intp)
    for col in range(k):
        prev = None
        if col > 0:
            prev = cost[:, col - 1 : col].view()
            prev.flags.writeable = False
        futures = [executor.submit(_fill_chunk, x, rows, col, prev) for rows in chunks]
        # Barrier: column col is complete before column col + 1 is read
        results = [f.result() for f in futures]
        for (lo, hi), (chunk_cost, chunk_start) in zip(chunks, results):
            cost[lo:hi, col] = chunk_cost
            index[lo:hi, col] = chunk_start
    return cost, index


def _resolve_workers(n_workers: Optional[int]) -> int:
    if n_workers is None:
        return config.parallel.workers
    return check_int(n_workers, "n_workers", 1)


def fisher_clustering_parallel(
    sorted_values: Any,
    k: int,
    *,
    n_workers: Optional[int] = None,
    summary_threshold: Optional[int] = None,
) -> FisherClustering:
    """
    Parallel version of ``fisher_clustering`` with identical tables.

    Args:
        sorted_values: Data sorted in ascending order
        k: Number of classes (2 <= k < number of distinct values)
        n_workers: Worker threads (default: ``CLASS_BREAKS_WORKERS``)
        summary_threshold: Class size above which summary statistics are
            reduced in parallel (default: ``CLASS_BREAKS_SUMMARY_THRESHOLD``)

    Returns:
        FisherClustering; ``cost``, ``index`` and ``starts`` equal the
        sequential result exactly, summaries agree up to rounding

    Raises:
        InvalidArgumentError: Same conditions as ``fisher_clustering``
    """
    x, k = _validate_sorted_input(sorted_values, k)
    workers = _resolve_workers(n_workers)
    if summary_threshold is None:
        summary_threshold = config.parallel.summary_threshold
    chunks = row_chunks(x.size, workers)
    logger.debug("Parallel Fisher n=%d k=%d workers=%d chunks=%s", x.size, k, workers, chunks)

    t0 = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        cost, index = _fill_tables_parallel(x, k, chunks, executor)
        logger.debug("Built Fisher tables in parallel in %.3fs", time.perf_counter() - t0)
        starts = backtrack_starts(index, k)
        summaries = summarize_classes(
            x,
            starts,
            threshold=summary_threshold,
            executor=executor,
            n_parts=workers,
        )
    return FisherClustering(cost=cost, index=index, starts=starts, summaries=summaries)


def fisher_breaks_parallel(data: Any, k: int, *, n_workers: Optional[int] = None) -> np.ndarray:
    """
    Fisher natural breaks computed with a worker pool.

    Same contract and bit-identical output as ``fisher_breaks``.

    Args:
        data: Observations (any order)
        k: Number of classes
        n_workers: Worker threads (default: ``CLASS_BREAKS_WORKERS``)

    Returns:
        Read-only breakpoint array

    Raises:
        InvalidArgumentError: Same conditions as ``fisher_breaks``
    """
    x = as_finite_array(data)
    k = check_class_count(k)
    workers = _resolve_workers(n_workers)
    fallback = _degenerate_fallback(x, k)
    if fallback is not None:
        return fallback

    check_sum_of_squares(x)
    sorted_x = np.sort(x)
    chunks = row_chunks(sorted_x.size, workers)
    t0 = time.perf_counter()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        _, index = _fill_tables_parallel(sorted_x, k, chunks, executor)
    logger.debug(
        "fisher_breaks_parallel n=%d k=%d workers=%d took %.3fs",
        sorted_x.size,
        k,
        workers,
        time.perf_counter() - t0,
    )
    return freeze(breaks_from_starts(sorted_x, backtrack_starts(index, k)))
