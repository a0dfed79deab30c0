from __future__ import annotations

import logging

import pytest

from phpexec.version import PhpVersion, is_version_line, parse_version_line


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("PHP 4.4.9 (cli) (built: Sep 17 2008)", PhpVersion.PHP4),
        ("PHP 5.6.40 (cli) (built: Jan 12 2019 13:35:01)", PhpVersion.PHP5),
        ("PHP 6.0.0-dev (cli)", PhpVersion.PHP6),
        ("PHP 7.0.1", PhpVersion.UNRECOGNIZED),
        ("PHP 10.0.0", PhpVersion.UNRECOGNIZED),
        ("PHP", PhpVersion.UNRECOGNIZED),
    ],
)
def test_parse_version_line_reads_fixed_offset(line: str, expected: PhpVersion) -> None:
    assert parse_version_line(line) is expected


def test_parse_version_line_logs_support_warnings(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="phpexec.version")

    parse_version_line("PHP 4.3.0")
    parse_version_line("PHP 6.0.0")
    parse_version_line("PHP 8.2.1")

    messages = [(record.levelno, record.getMessage()) for record in caplog.records]
    assert (logging.WARNING, "PHP4 will not be supported anymore!") in messages
    assert (logging.WARNING, "PHP6 is not supported yet!") in messages
    assert (logging.ERROR, "Cannot find out PHP version: PHP 8.2.1") in messages


def test_is_version_line() -> None:
    assert is_version_line("PHP 5.3.0 (cli)") is True
    assert is_version_line("Copyright (c) The PHP Group") is False
