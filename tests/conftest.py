"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

from itertools import combinations

import numpy as np
import pytest


@pytest.fixture
def sample_values():
    """Twelve skewed observations used throughout the classInt examples."""
    return [10, 12, 15, 18, 20, 22, 25, 28, 30, 35, 40, 45]


@pytest.fixture
def clustered_values():
    """Three well-separated groups of three values each."""
    return [1.0, 2.0, 3.0, 10.0, 11.0, 12.0, 20.0, 21.0, 22.0]


@pytest.fixture
def large_values():
    """10,000 random observations (fixed seed)."""
    rng = np.random.default_rng(42)
    return rng.gamma(shape=2.0, scale=10.0, size=10_000)


def brute_force_cost(sorted_values, k):
    """Minimal within-class sum of squares over every contiguous k-partition."""
    x = np.asarray(sorted_values, dtype=np.float64)
    n = x.size
    best = np.inf
    for cuts in combinations(range(1, n), k - 1):
        edges = (0,) + cuts + (n,)
        total = 0.0
        for a, b in zip(edges[:-1], edges[1:]):
            seg = x[a:b]
            total += float(np.sum((seg - seg.mean()) ** 2))
        best = min(best, total)
    return best


@pytest.fixture
def brute_force():
    """Exhaustive reference optimizer for small inputs."""
    return brute_force_cost
