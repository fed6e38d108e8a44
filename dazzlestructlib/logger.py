"""Logging helpers for DazzleStructLib.

The library only ever logs through loggers under the ``dazzlestructlib``
namespace and never installs handlers on its own. Applications that want
console output call :func:`setup_logger` once.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "dazzlestructlib"
LOG_LEVEL_ENV = "DAZZLESTRUCT_LOG_LEVEL"

__all__ = ["ROOT_LOGGER_NAME", "LOG_LEVEL_ENV", "get_logger", "setup_logger"]


def get_logger(suffix: str) -> logging.Logger:
    """Return the library logger for a sub-component.

    Args:
        suffix: Dotted component name, e.g. ``"core.traverser"``

    Returns:
        Logger named ``dazzlestructlib.<suffix>``
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{suffix}")


def setup_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Configure and return the package root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Falls back to
            the ``DAZZLESTRUCT_LOG_LEVEL`` environment variable, then INFO.
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    level = level or os.getenv(LOG_LEVEL_ENV, "INFO")
    format_string = format_string or (
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Only configure once; a NullHandler alone does not count
    if not any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(fmt=format_string, datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper()))
        logger.propagate = False

    return logger
