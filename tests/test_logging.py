from __future__ import annotations

import logging

import pytest

from phpexec.util.logging import log_php_line, resolve_level


@pytest.mark.parametrize(
    ("level", "expected"),
    [("debug", logging.DEBUG), (" WARNING ", logging.WARNING), ("chatty", logging.INFO), (5, 5)],
)
def test_resolve_level(level: str | int, expected: int) -> None:
    assert resolve_level(level) == expected


def test_log_php_line_uses_echo_level(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("test.php")
    caplog.set_level(logging.DEBUG, logger="test.php")

    log_php_line(logger, "php.out", "loud", echo=True)
    log_php_line(logger, "php.err", "quiet", echo=False)

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "php.out: loud"),
        (logging.DEBUG, "php.err: quiet"),
    ]
