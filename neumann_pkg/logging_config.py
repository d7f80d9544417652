"""Structured logging configuration for Neumann.

Engine and API records may carry ``position`` (offset of the token being
handled) and ``code`` (error code of a failed evaluation) through ``extra``;
the formatter appends them as ``key=value`` fields.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

ROOT_LOGGER = "neumann"

# Record attributes rendered after the message when present
CONTEXT_FIELDS = ("position", "code")


class StructuredFormatter(logging.Formatter):
    """Formats records as ``<timestamp> [LEVEL] name: message key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        fields = [
            f"{name}={getattr(record, name)}"
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        ]
        if fields:
            message = f"{message} {' '.join(fields)}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | int = "WARNING", log_file: str | None = None) -> logging.Logger:
    """Configure the ``neumann`` logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number;
            unknown names fall back to WARNING
        log_file: Optional file receiving the same records as stderr

    Returns:
        The configured ``neumann`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(_resolve_level(level))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = StructuredFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``neumann.<name>`` child logger for a module."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
