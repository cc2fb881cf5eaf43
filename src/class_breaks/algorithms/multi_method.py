"""
Multi-method classification.

Computes breakpoints with every strategy (Fisher, k-means, quantile, equal
interval) and applies them to the same observations. Missing values
(``None``) are skipped when computing breaks and reported as missing when
classifying.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

import numpy as np

from ..config import config
from ..utils.logging_config import get_logger
from ._validation import InvalidArgumentError, check_class_count, drop_missing
from .backtrack import degenerate_breaks, freeze
from .classify import classify_indices, cut_data
from .fisher import fisher_breaks
from .fisher_parallel import fisher_breaks_parallel
from .simple_breaks import equal_breaks, kmeans_breaks, quantile_breaks

logger = get_logger(__name__)

STRATEGIES = ("fisher", "kmeans", "quantile", "equal")
CLASSIFY_ALL_OUTPUTS = ("breaks", "index", "label")


@dataclass(frozen=True)
class Breaks:
    """Breakpoints computed by each strategy."""

    fisher: np.ndarray
    kmeans: np.ndarray
    quantile: np.ndarray
    equal: np.ndarray

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {name: getattr(self, name) for name in STRATEGIES}


def _resolve_strategies(strategies: Optional[Iterable[str]]) -> List[str]:
    if strategies is None:
        return list(STRATEGIES)
    names = list(strategies)
    unknown = [s for s in names if s not in STRATEGIES]
    if unknown:
        raise InvalidArgumentError(
            f"Unknown strategies {unknown}; choose from {list(STRATEGIES)}"
        )
    if not names:
        raise InvalidArgumentError("At least one strategy is required")
    return names


def _strategy_functions(parallel: bool) -> Dict[str, Callable[[np.ndarray, int], np.ndarray]]:
    return {
        "fisher": fisher_breaks_parallel if parallel else fisher_breaks,
        "kmeans": kmeans_breaks,
        "quantile": quantile_breaks,
        "equal": equal_breaks,
    }


def get_breaks_raw(
    data: Sequence[Any],
    n: Optional[int] = None,
    *,
    strategies: Optional[Iterable[str]] = None,
    parallel: bool = False,
) -> Dict[str, np.ndarray]:
    """
    Breakpoints for each requested strategy.

    Args:
        data: Observations; ``None`` entries are skipped
        n: Number of classes (default: ``CLASS_BREAKS_DEFAULT_CLASSES``)
        strategies: Subset of ``STRATEGIES`` (default: all)
        parallel: Use the parallel Fisher optimizer

    Returns:
        Mapping of strategy name to read-only breakpoint array. When the
        data has no more distinct values than *n*, every strategy gets the
        sorted distinct values.

    Raises:
        InvalidArgumentError: If there are no non-missing values or n < 2
    """
    names = _resolve_strategies(strategies)
    x = drop_missing(data)
    n = config.default_classes if n is None else check_class_count(n)

    distinct = np.unique(x)
    if distinct.size <= n:
        logger.warning(
            "Number of unique values (%d) is less than or equal to the number of classes (%d)",
            distinct.size,
            n,
        )
        return {name: freeze(degenerate_breaks(x)) for name in names}

    functions = _strategy_functions(parallel)
    return {name: functions[name](x, n) for name in names}


def compute_breaks(data: Sequence[Any], n: Optional[int] = None, *, parallel: bool = False) -> Breaks:
    """All four strategies' breakpoints as a ``Breaks`` record."""
    return Breaks(**get_breaks_raw(data, n, parallel=parallel))


def get_bins(
    data: Sequence[Any],
    n: Optional[int] = None,
    *,
    strategies: Optional[Iterable[str]] = None,
    parallel: bool = False,
) -> Dict[str, List[str]]:
    """
    Display labels for every observation under each strategy.

    Example:
        bins = get_bins([1, 5, 7, 9, 10, 15, 20, 30, 50, 100], 5)
        fisher_labels = bins["fisher"]
    """
    breaks = get_breaks_raw(data, n, strategies=strategies, parallel=parallel)
    return {name: cut_data(data, b) for name, b in breaks.items()}


def get_bin_indices(
    data: Sequence[Any],
    n: Optional[int] = None,
    *,
    strategies: Optional[Iterable[str]] = None,
    parallel: bool = False,
) -> Dict[str, np.ndarray]:
    """
    Class numbers for every observation under each strategy.

    The overflow threshold uses the requested class count *n*, even when a
    strategy returned fewer breakpoints.
    """
    n = config.default_classes if n is None else check_class_count(n)
    breaks = get_breaks_raw(data, n, strategies=strategies, parallel=parallel)
    return {name: classify_indices(data, b, class_count=n) for name, b in breaks.items()}


def classify_all(
    data: Sequence[Any],
    class_count: Optional[int] = None,
    strategies: Optional[Iterable[str]] = None,
    *,
    output: str = "breaks",
    parallel: bool = False,
) -> Dict[str, Any]:
    """
    Run several strategies over the same data.

    Args:
        data: Observations; ``None`` marks a missing value
        class_count: Number of classes (default: ``CLASS_BREAKS_DEFAULT_CLASSES``)
        strategies: Subset of ``STRATEGIES`` (default: all)
        output: ``"breaks"`` for breakpoint arrays, ``"index"`` for class
            numbers or ``"label"`` for display strings
        parallel: Use the parallel Fisher optimizer

    Returns:
        Mapping of strategy name to breakpoints or per-observation labels

    Raises:
        InvalidArgumentError: Unknown output form or strategy, or invalid data
    """
    if output == "breaks":
        return get_breaks_raw(data, class_count, strategies=strategies, parallel=parallel)
    if output == "index":
        return get_bin_indices(data, class_count, strategies=strategies, parallel=parallel)
    if output == "label":
        return get_bins(data, class_count, strategies=strategies, parallel=parallel)
    raise InvalidArgumentError(
        f"output must be one of {CLASSIFY_ALL_OUTPUTS}, got {output!r}"
    )
