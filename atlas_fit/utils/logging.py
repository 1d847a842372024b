"""Logging setup for Atlas Fit.

Library modules log through ``logging.getLogger(__name__)``, which places
them under the ``atlas_fit`` logger configured here by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "atlas_fit"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks the handler this module installs so reconfiguration replaces it
# without touching handlers added by callers (e.g. pytest's caplog).
_HANDLER_ATTR = "_atlas_fit_handler"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(
    level: str | int | None = None,
    *,
    stream: TextIO | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the application logger.

    Args:
        level: Level name or number. Unknown names and None mean INFO.
        stream: Destination for log records (defaults to stderr).
        format_string: Format string for log messages.
        date_format: Format string for timestamps.

    Returns:
        The ``atlas_fit`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    log_level = _resolve_level(level)
    logger.setLevel(log_level)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(format_string, datefmt=date_format))
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the application logger.

    ``name`` may be a bare component ("cli") or a full module path
    ("atlas_fit.scoring.service").
    """
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Drop installed handlers and restore defaults (useful for testing)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
