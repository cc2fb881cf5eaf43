"""
Class Breaks - Core Package

Class-interval breakpoints for classification and thematic mapping.

This package provides:
- Fisher-Jenks natural breaks by exact optimization (sequential and threaded)
- Equal-interval, quantile and k-means breaks
- Interval assignment compatible with R's classInt boundary convention
"""

__version__ = "0.1.0"

from .algorithms import (
    InvalidArgumentError,
    classify,
    classify_all,
    cut_data,
    fisher_breaks,
    fisher_breaks_parallel,
    get_bin_indices,
    get_bins,
    get_breaks_raw,
)

# Explicitly import subpackages to ensure they're discoverable
from . import algorithms
from . import utils

__all__ = [
    "InvalidArgumentError",
    "fisher_breaks",
    "fisher_breaks_parallel",
    "classify",
    "cut_data",
    "classify_all",
    "get_breaks_raw",
    "get_bins",
    "get_bin_indices",
    "algorithms",
    "utils",
]
