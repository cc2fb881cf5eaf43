"""
Logging setup for Class Breaks.

Modules obtain a named logger with ``get_logger(__name__)``; applications
call ``setup_logging()`` once to attach a stream handler to the package
logger.

Usage:
    from class_breaks.utils import setup_logging, get_logger

    setup_logging("DEBUG")
    logger = get_logger(__name__)
"""

import logging
from typing import Optional, Union

PACKAGE_LOGGER = "class_breaks"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return the logger for *name* (normally the calling module's ``__name__``)."""
    return logging.getLogger(name)


def setup_logging(
    level: Optional[Union[int, str]] = None,
    fmt: str = DEFAULT_FORMAT,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the package logger with a single stream handler.

    Args:
        level: Logging level name or number. Defaults to the configured
            ``CLASS_BREAKS_LOG_LEVEL``.
        fmt: Log record format string
        force: Replace handlers installed by an earlier call

    Returns:
        The configured package logger
    """
    global _configured

    if level is None:
        from ..config import config

        level = config.log_level
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if _configured and not force:
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
    return logger
