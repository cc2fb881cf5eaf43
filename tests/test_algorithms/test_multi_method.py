"""
Tests for multi-method classification.
"""

import numpy as np
import pytest

from class_breaks.algorithms import (
    STRATEGIES,
    Breaks,
    InvalidArgumentError,
    classify_all,
    compute_breaks,
    fisher_breaks,
    get_bin_indices,
    get_bins,
    get_breaks_raw,
)
from class_breaks.config import config

DATA = [1, 5, 7, 9, None, 15, 20, 30, None, 100, 3, 12]


def test_get_breaks_raw_all_strategies():
    breaks = get_breaks_raw(DATA, 3)
    assert list(breaks) == list(STRATEGIES)
    for b in breaks.values():
        assert b[0] == 1.0
        assert b[-1] == 100.0
        assert not b.flags.writeable


def test_get_breaks_raw_skips_missing():
    """Fisher breaks equal those of the non-missing values."""
    clean = [v for v in DATA if v is not None]
    np.testing.assert_array_equal(get_breaks_raw(DATA, 4)["fisher"], fisher_breaks(clean, 4))


def test_get_breaks_raw_subset():
    breaks = get_breaks_raw(DATA, 3, strategies=["equal", "fisher"])
    assert list(breaks) == ["equal", "fisher"]


def test_get_breaks_raw_parallel_matches():
    np.testing.assert_array_equal(
        get_breaks_raw(DATA, 4, parallel=True)["fisher"], get_breaks_raw(DATA, 4)["fisher"]
    )


def test_get_breaks_raw_degenerate():
    """Every strategy gets the distinct values when there are too few of them."""
    breaks = get_breaks_raw([1, 1, None, 2, 2], 3)
    for b in breaks.values():
        np.testing.assert_array_equal(b, [1.0, 2.0])


def test_get_breaks_raw_default_class_count(monkeypatch):
    monkeypatch.setattr(config, "default_classes", 4)
    assert get_breaks_raw(DATA)["fisher"].size == 5


def test_get_breaks_raw_all_missing():
    with pytest.raises(InvalidArgumentError, match="no non-missing values"):
        get_breaks_raw([None, None], 3)


def test_get_breaks_raw_unknown_strategy():
    with pytest.raises(InvalidArgumentError, match="Unknown strategies"):
        get_breaks_raw(DATA, 3, strategies=["fisher", "jenks"])


def test_compute_breaks_record():
    result = compute_breaks(DATA, 3)
    assert isinstance(result, Breaks)
    np.testing.assert_array_equal(result.fisher, get_breaks_raw(DATA, 3)["fisher"])
    assert set(result.as_dict()) == set(STRATEGIES)


def test_get_bins_missing_positions():
    """Missing observations keep their position and get the missing label."""
    bins = get_bins(DATA, 3)
    for labels in bins.values():
        assert len(labels) == len(DATA)
        assert labels[4] == "Missing"
        assert labels[8] == "Missing"
        assert "Missing" not in labels[:4]


def test_get_bin_indices_missing_positions():
    indices = get_bin_indices(DATA, 3)
    for idx in indices.values():
        assert idx.shape == (len(DATA),)
        assert idx[4] == 0
        assert idx[8] == 0
        assert np.all(idx[[0, 1, 2, 3, 5, 6, 7, 9, 10, 11]] >= 1)


def test_get_bin_indices_fisher_extremes():
    idx = get_bin_indices(DATA, 3)["fisher"]
    assert idx[0] == 1
    assert idx[9] == 3


def test_classify_all_output_forms():
    assert set(classify_all(DATA, 3)) == set(STRATEGIES)
    labels = classify_all(DATA, 3, ["fisher"], output="label")
    assert labels["fisher"] == get_bins(DATA, 3, strategies=["fisher"])["fisher"]
    indices = classify_all(DATA, 3, ["fisher"], output="index")
    np.testing.assert_array_equal(
        indices["fisher"], get_bin_indices(DATA, 3, strategies=["fisher"])["fisher"]
    )


def test_classify_all_rejects_unknown_output():
    with pytest.raises(InvalidArgumentError, match="output must be one of"):
        classify_all(DATA, 3, output="table")
