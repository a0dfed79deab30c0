from __future__ import annotations

from pathlib import Path

import pytest

from phpexec.app import AppConfigError, create_executable


def test_create_executable_applies_override(tmp_path: Path) -> None:
    (tmp_path / "phpexec.yaml").write_text('{"executable": "php5", "log_php_output": true}', encoding="utf-8")

    executable = create_executable(tmp_path, executable="/usr/local/bin/php")

    assert executable.config.executable == "/usr/local/bin/php"
    assert executable.config.log_php_output is True


def test_create_executable_wraps_config_errors(tmp_path: Path) -> None:
    (tmp_path / "phpexec.yaml").write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(AppConfigError):
        create_executable(tmp_path)
