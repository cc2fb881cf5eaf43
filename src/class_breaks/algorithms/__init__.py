"""
Algorithm Core Library - class-interval breakpoints and interval assignment.

This module provides the Fisher-Jenks optimizer (sequential and parallel),
breakpoint extraction, the interval classifier and the simpler breakpoint
strategies, with numpy as the only numeric dependency.
"""

from ._validation import InvalidArgumentError
from .backtrack import (
    ClassSummary,
    backtrack_starts,
    degenerate_breaks,
    extract_breaks,
    summarize_classes,
)
from .fisher import FisherClustering, fisher_breaks, fisher_clustering
from .fisher_parallel import fisher_breaks_parallel, fisher_clustering_parallel
from .classify import (
    MISSING_INDEX,
    MISSING_LABEL,
    Placement,
    classify,
    classify_indices,
    cut_data,
    locate,
)
from .simple_breaks import equal_breaks, fixed_breaks, kmeans_breaks, quantile_breaks
from .multi_method import (
    STRATEGIES,
    Breaks,
    classify_all,
    compute_breaks,
    get_bin_indices,
    get_bins,
    get_breaks_raw,
)

__all__ = [
    "InvalidArgumentError",
    # Fisher optimizer
    "FisherClustering",
    "fisher_clustering",
    "fisher_breaks",
    "fisher_clustering_parallel",
    "fisher_breaks_parallel",
    # Extraction
    "ClassSummary",
    "backtrack_starts",
    "extract_breaks",
    "degenerate_breaks",
    "summarize_classes",
    # Classification
    "MISSING_INDEX",
    "MISSING_LABEL",
    "Placement",
    "locate",
    "classify",
    "classify_indices",
    "cut_data",
    # Simple strategies
    "equal_breaks",
    "quantile_breaks",
    "kmeans_breaks",
    "fixed_breaks",
    # Multi-method
    "STRATEGIES",
    "Breaks",
    "compute_breaks",
    "get_breaks_raw",
    "get_bins",
    "get_bin_indices",
    "classify_all",
]
