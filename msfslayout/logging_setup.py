"""Console logging configuration for the command-line front door.

``setup_logging`` is idempotent: repeated calls keep the first handler unless
``force`` is passed. Library code only ever calls ``logging.getLogger``.
"""

from __future__ import annotations

import logging
import os
import sys

LOGGER_NAME = "msfslayout"
LOG_LEVEL_ENV = "MSFSLAYOUT_LOG_LEVEL"
DEFAULT_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(debug: bool, quiet: bool) -> int:
    if debug:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(*, debug: bool = False, quiet: bool = False, force: bool = False) -> logging.Logger:
    """Attach one stdout handler to the package logger and set its level."""
    logger = logging.getLogger(LOGGER_NAME)
    level = _resolve_level(debug, quiet)
    if getattr(setup_logging, "_configured", False) and not force:
        logger.setLevel(level)
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(DEBUG_FORMAT if debug else DEFAULT_FORMAT))
    logger.addHandler(console)
    logger.setLevel(level)
    logger.propagate = False

    setup_logging._configured = True  # type: ignore[attr-defined]
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


__all__ = [
    "LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "setup_logging",
    "get_logger",
]
