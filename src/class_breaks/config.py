"""
Configuration management for Class Breaks.

Loads configuration from environment variables (typically from a .env file).
Uses python-dotenv to load .env automatically.

Usage:
    from class_breaks.config import config

    # Worker count for the parallel optimizer
    n_workers = config.parallel.workers

    # Overflow threshold multiplier used by the classifier
    multiplier = config.classifier.extreme_multiplier
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class ParallelConfig:
    """Settings for the parallel Fisher optimizer."""
    workers: Optional[int] = None
    summary_threshold: int = 1000

    def __post_init__(self):
        """Fill in the worker count and validate."""
        if self.workers is None:
            self.workers = os.cpu_count() or 1
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.summary_threshold < 1:
            raise ValueError(
                f"summary_threshold must be >= 1, got {self.summary_threshold}"
            )


@dataclass
class ClassifierConfig:
    """Settings for interval assignment."""
    extreme_multiplier: float = 3.0

    def __post_init__(self):
        if self.extreme_multiplier < 0:
            raise ValueError(
                f"extreme_multiplier must be >= 0, got {self.extreme_multiplier}"
            )


@dataclass
class KMeansConfig:
    """Settings for k-means breaks."""
    restarts: int = 3
    max_iter: int = 200

    def __post_init__(self):
        if self.restarts < 1:
            raise ValueError(f"restarts must be >= 1, got {self.restarts}")
        if self.max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {self.max_iter}")


class Config:
    """
    Library configuration loaded from environment variables.

    Environment variables can be set:
    1. In a .env file in the project root
    2. In the system environment
    3. In a container/deployment environment
    """

    def __init__(self):
        """Load configuration from environment."""
        workers = _env_int("CLASS_BREAKS_WORKERS", 0)
        self.parallel = ParallelConfig(
            workers=workers or None,
            summary_threshold=_env_int("CLASS_BREAKS_SUMMARY_THRESHOLD", 1000),
        )
        self.classifier = ClassifierConfig(
            extreme_multiplier=_env_float("CLASS_BREAKS_EXTREME_MULTIPLIER", 3.0),
        )
        self.kmeans = KMeansConfig(
            restarts=_env_int("CLASS_BREAKS_KMEANS_RESTARTS", 3),
            max_iter=_env_int("CLASS_BREAKS_KMEANS_MAX_ITER", 200),
        )
        self.default_classes = _env_int("CLASS_BREAKS_DEFAULT_CLASSES", 7)
        if self.default_classes < 2:
            raise ValueError(
                f"CLASS_BREAKS_DEFAULT_CLASSES must be >= 2, got {self.default_classes}"
            )
        self.log_level = os.getenv("CLASS_BREAKS_LOG_LEVEL", "WARNING").upper()


# Global config instance
config = Config()
