"""PHP interpreter generations and the parser for ``php -v`` output."""

from __future__ import annotations

import logging
from enum import Enum

from phpexec.util.logging import get_logger

VERSION_FLAG = "-v"
VERSION_LINE_PREFIX = "PHP"

_LOGGER = get_logger("phpexec.version")


class PhpVersion(Enum):
    """Major generation of the PHP interpreter."""

    UNKNOWN = "unknown"
    PHP4 = "php4"
    PHP5 = "php5"
    PHP6 = "php6"
    UNRECOGNIZED = "unrecognized"


def is_version_line(line: str) -> bool:
    """Return whether the line is the banner printed by ``php -v``."""

    return line.startswith(VERSION_LINE_PREFIX)


def parse_version_line(line: str, logger: logging.Logger | None = None) -> PhpVersion:
    """Map a ``php -v`` banner line to its interpreter generation.

    The banner is assumed to read ``PHP <major>.<minor>.<patch> ...``; only
    the character at offset 4 is inspected, so ``PHP 7.0.1`` and ``PHP 10.0``
    are both reported as unrecognized.

    Args:
        line: First output line starting with ``PHP``.
        logger: Logger receiving the support warnings. Defaults to the module logger.

    Returns:
        The matching PhpVersion member.
    """

    log = logger or _LOGGER
    major = line[4:5]
    if major == "6":
        log.warning("PHP6 is not supported yet!")
        return PhpVersion.PHP6
    if major == "5":
        return PhpVersion.PHP5
    if major == "4":
        log.warning("PHP4 will not be supported anymore!")
        return PhpVersion.PHP4
    log.error("Cannot find out PHP version: %s", line)
    return PhpVersion.UNRECOGNIZED
