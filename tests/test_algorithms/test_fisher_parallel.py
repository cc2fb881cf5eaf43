"""
Tests for the thread-parallel Fisher optimizer.

The parallel optimizer must reproduce the sequential tables and breaks
exactly, for any worker count.
"""

import numpy as np
import pytest

from class_breaks.algorithms import (
    InvalidArgumentError,
    fisher_breaks,
    fisher_breaks_parallel,
    fisher_clustering,
    fisher_clustering_parallel,
)
from class_breaks.algorithms.fisher_parallel import row_chunks


# ------------------------------------------------------------------
# row_chunks
# ------------------------------------------------------------------


def test_row_chunks_cover_all_rows():
    """Chunks are contiguous, disjoint and cover 0..n-1."""
    chunks = row_chunks(103, 4)
    assert len(chunks) == 4
    assert chunks[0][0] == 0
    assert chunks[-1][1] == 103
    for (_, hi), (lo, _) in zip(chunks[:-1], chunks[1:]):
        assert hi == lo


def test_row_chunks_more_workers_than_rows():
    """No empty chunks are produced."""
    chunks = row_chunks(3, 8)
    assert chunks == [(0, 1), (1, 2), (2, 3)]


def test_row_chunks_single_worker():
    assert row_chunks(10, 1) == [(0, 10)]


# ------------------------------------------------------------------
# Equivalence with the sequential optimizer
# ------------------------------------------------------------------


@pytest.mark.parametrize("n_workers", [1, 2, 3, 8])
def test_parallel_tables_match_sequential(sample_values, n_workers):
    """Cost and index tables are identical cell for cell."""
    seq = fisher_clustering(sample_values, 4)
    par = fisher_clustering_parallel(sample_values, 4, n_workers=n_workers)
    np.testing.assert_array_equal(par.cost, seq.cost)
    np.testing.assert_array_equal(par.index, seq.index)
    np.testing.assert_array_equal(par.starts, seq.starts)


@pytest.mark.parametrize("k", [2, 3, 5])
def test_parallel_breaks_match_sequential(sample_values, k):
    """Breaks are identical for the twelve-value example."""
    np.testing.assert_array_equal(
        fisher_breaks_parallel(sample_values, k, n_workers=4),
        fisher_breaks(sample_values, k),
    )


def test_parallel_breaks_match_sequential_large(large_values):
    """Breaks are identical for 10,000 values."""
    seq = fisher_breaks(large_values, 5)
    par = fisher_breaks_parallel(large_values, 5, n_workers=4)
    np.testing.assert_array_equal(par, seq)


def test_parallel_breaks_with_ties():
    """Heavily tied data follows the same tie-break."""
    rng = np.random.default_rng(7)
    data = rng.integers(0, 12, size=300).astype(float)
    for k in (3, 6, 9):
        np.testing.assert_array_equal(
            fisher_breaks_parallel(data, k, n_workers=3), fisher_breaks(data, k)
        )


def test_parallel_summaries_match_sequential():
    """Parallel class summaries agree with the sequential ones up to rounding."""
    rng = np.random.default_rng(1)
    x = np.sort(rng.normal(size=2_000))
    seq = fisher_clustering(x, 3)
    par = fisher_clustering_parallel(x, 3, n_workers=4, summary_threshold=100)
    assert len(par.summaries) == len(seq.summaries)
    for p, s in zip(par.summaries, seq.summaries):
        assert p.size == s.size
        assert p.minimum == s.minimum
        assert p.maximum == s.maximum
        assert p.mean == pytest.approx(s.mean, rel=1e-9, abs=1e-12)
        assert p.std == pytest.approx(s.std, rel=1e-9)


def test_parallel_breaks_read_only(sample_values):
    breaks = fisher_breaks_parallel(sample_values, 3, n_workers=2)
    assert not breaks.flags.writeable


def test_parallel_breaks_degenerate():
    """The degenerate short-circuit applies to the parallel path too."""
    np.testing.assert_array_equal(
        fisher_breaks_parallel([2, 2, 5, 5], 3, n_workers=2), [2.0, 5.0]
    )


def test_parallel_uses_configured_workers(sample_values):
    """Omitting n_workers falls back to the configured default."""
    np.testing.assert_array_equal(
        fisher_breaks_parallel(sample_values, 3), fisher_breaks(sample_values, 3)
    )


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------


@pytest.mark.parametrize("n_workers", [0, -1, 1.5])
def test_parallel_rejects_bad_worker_count(sample_values, n_workers):
    with pytest.raises(InvalidArgumentError, match="n_workers"):
        fisher_breaks_parallel(sample_values, 3, n_workers=n_workers)


def test_parallel_clustering_rejects_unsorted():
    with pytest.raises(InvalidArgumentError, match="sorted"):
        fisher_clustering_parallel([2.0, 1.0, 3.0], 2, n_workers=2)


def test_parallel_rejects_non_finite():
    with pytest.raises(InvalidArgumentError):
        fisher_breaks_parallel([1.0, np.nan, 3.0], 2, n_workers=2)


def test_parallel_rejects_values_that_overflow_when_squared():
    huge = [1e200, 2e200, 3e200, 5e200, 9e200]
    with pytest.raises(InvalidArgumentError, match="too large"):
        fisher_breaks_parallel(huge, 2, n_workers=2)
    with pytest.raises(InvalidArgumentError, match="too large"):
        fisher_clustering_parallel(huge, 2, n_workers=2)
