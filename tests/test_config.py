"""
Tests for environment-based configuration.
"""

import os

import pytest

from class_breaks.config import ClassifierConfig, Config, KMeansConfig, ParallelConfig

ENV_VARS = [
    "CLASS_BREAKS_WORKERS",
    "CLASS_BREAKS_SUMMARY_THRESHOLD",
    "CLASS_BREAKS_EXTREME_MULTIPLIER",
    "CLASS_BREAKS_KMEANS_RESTARTS",
    "CLASS_BREAKS_KMEANS_MAX_ITER",
    "CLASS_BREAKS_DEFAULT_CLASSES",
    "CLASS_BREAKS_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every CLASS_BREAKS_* variable for the duration of a test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = Config()
    assert cfg.parallel.workers == (os.cpu_count() or 1)
    assert cfg.parallel.summary_threshold == 1000
    assert cfg.classifier.extreme_multiplier == 3.0
    assert cfg.kmeans.restarts == 3
    assert cfg.kmeans.max_iter == 200
    assert cfg.default_classes == 7
    assert cfg.log_level == "WARNING"


def test_env_overrides(clean_env):
    clean_env.setenv("CLASS_BREAKS_WORKERS", "3")
    clean_env.setenv("CLASS_BREAKS_SUMMARY_THRESHOLD", "50")
    clean_env.setenv("CLASS_BREAKS_EXTREME_MULTIPLIER", "1.5")
    clean_env.setenv("CLASS_BREAKS_KMEANS_RESTARTS", "5")
    clean_env.setenv("CLASS_BREAKS_DEFAULT_CLASSES", "4")
    clean_env.setenv("CLASS_BREAKS_LOG_LEVEL", "debug")
    cfg = Config()
    assert cfg.parallel.workers == 3
    assert cfg.parallel.summary_threshold == 50
    assert cfg.classifier.extreme_multiplier == 1.5
    assert cfg.kmeans.restarts == 5
    assert cfg.default_classes == 4
    assert cfg.log_level == "DEBUG"


def test_zero_workers_means_cpu_count(clean_env):
    clean_env.setenv("CLASS_BREAKS_WORKERS", "0")
    assert Config().parallel.workers == (os.cpu_count() or 1)


def test_non_integer_env_value(clean_env):
    clean_env.setenv("CLASS_BREAKS_WORKERS", "many")
    with pytest.raises(ValueError, match="CLASS_BREAKS_WORKERS must be an integer"):
        Config()


def test_default_classes_too_small(clean_env):
    clean_env.setenv("CLASS_BREAKS_DEFAULT_CLASSES", "1")
    with pytest.raises(ValueError, match="CLASS_BREAKS_DEFAULT_CLASSES"):
        Config()


def test_section_validation():
    with pytest.raises(ValueError, match="workers"):
        ParallelConfig(workers=-2)
    with pytest.raises(ValueError, match="extreme_multiplier"):
        ClassifierConfig(extreme_multiplier=-0.5)
    with pytest.raises(ValueError, match="max_iter"):
        KMeansConfig(max_iter=0)
