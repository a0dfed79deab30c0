"""Logging utilities for phpexec."""

from __future__ import annotations

import logging
from typing import Final

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PHP_OUTPUT_PREFIX: Final[str] = "php.out"
PHP_ERROR_PREFIX: Final[str] = "php.err"


def configure_logging(level: str | int = "INFO", fmt: str | None = None) -> None:
    """Configure application logging.

    Args:
        level: Level name such as "DEBUG" or a numeric level. Unknown names fall back to INFO.
        fmt: Optional logging format string.
    """

    logging.basicConfig(level=resolve_level(level), format=fmt or DEFAULT_LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module or component."""

    return logging.getLogger(name)


def resolve_level(level: str | int) -> int:
    """Translate a level name or number into a numeric logging level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def log_php_line(logger: logging.Logger, prefix: str, line: str, *, echo: bool) -> None:
    """Log one line of interpreter output, at INFO when echoing and DEBUG otherwise."""

    logger.log(logging.INFO if echo else logging.DEBUG, "%s: %s", prefix, line)
