"""Logging initialisation with labelled prefixes.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached here, by the CLI, so that an embedding application keeps control of
its own logging configuration.
"""

from __future__ import annotations

import logging
import sys

__all__ = [
    "LOGGER_NAME",
    "reset_logging",
    "setup_logging",
]

LOGGER_NAME = "listing_doctor"

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formats records as ``LABEL message``."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from listing_doctor.settings import LOG_LEVEL

        level = LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level.

    Output goes to stderr so that ``--json`` stdout stays machine readable.
    """
    global _logger

    resolved = _resolve_level(level)
    if _logger is not None:
        _logger.setLevel(resolved)
        for handler in _logger.handlers:
            handler.setLevel(resolved)
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # Keep CLI output single-sourced.
    logger.propagate = False

    _logger = logger
    return logger


def reset_logging() -> None:
    """Drop the configured handler. Mainly for tests."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers[:]:
            _logger.removeHandler(handler)
        _logger.propagate = True
    _logger = None
