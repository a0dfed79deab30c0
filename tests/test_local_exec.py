from __future__ import annotations

import subprocess
import sys
from typing import Any

import pytest

from phpexec.errors import LaunchError
from phpexec.execution.local_exec import LocalLauncher

_SCRIPT = """
import os, sys
print("first")
sys.stderr.write("problem\\n")
print("value=" + os.environ.get("PHPEXEC_TEST_VAR", ""))
sys.exit(4)
"""


def test_local_launcher_streams_both_channels() -> None:
    out: list[str] = []
    err: list[str] = []

    exit_code = LocalLauncher().launch(
        [sys.executable, "-c", _SCRIPT],
        out.append,
        err.append,
        env={"PHPEXEC_TEST_VAR": "42"},
    )

    assert exit_code == 4
    assert out == ["first", "value=42"]
    assert err == ["problem"]


def test_local_launcher_drains_large_stderr() -> None:
    err: list[str] = []
    script = "import sys\nfor i in range(20000):\n    sys.stderr.write('line %d\\n' % i)\n"

    exit_code = LocalLauncher().launch([sys.executable, "-c", script], lambda line: None, err.append)

    assert exit_code == 0
    assert len(err) == 20000
    assert err[-1] == "line 19999"


def test_local_launcher_reports_missing_executable() -> None:
    with pytest.raises(LaunchError) as exc_info:
        LocalLauncher().launch(["/nonexistent/php-binary"], lambda line: None, lambda line: None)

    assert "/nonexistent/php-binary" in str(exc_info.value)


def test_local_launcher_rejects_empty_command() -> None:
    with pytest.raises(ValueError):
        LocalLauncher().launch([], lambda line: None, lambda line: None)


def test_local_launcher_kills_process_when_handler_fails() -> None:
    script = "import time\nprint('tick', flush=True)\ntime.sleep(30)\n"

    def explode(line: str) -> None:
        raise RuntimeError(f"handler failed on {line}")

    with pytest.raises(RuntimeError, match="handler failed on tick"):
        LocalLauncher().launch([sys.executable, "-c", script], explode, lambda line: None)


def test_local_launcher_uses_argument_vector(monkeypatch: Any) -> None:
    calls: dict[str, Any] = {}
    real_popen = subprocess.Popen

    def fake_popen(*args: Any, **kwargs: Any) -> subprocess.Popen[str]:
        calls["args"] = args
        calls["kwargs"] = kwargs
        return real_popen([sys.executable, "-c", "pass"], **kwargs)

    monkeypatch.setattr(subprocess, "Popen", fake_popen)

    LocalLauncher().launch(["php", "-r", "echo 1;"], lambda line: None, lambda line: None)

    assert calls["args"][0] == ["php", "-r", "echo 1;"]
    assert "shell" not in calls["kwargs"]
    assert calls["kwargs"]["text"] is True


def test_local_launcher_replaces_undecodable_bytes() -> None:
    script = (
        "import sys\n"
        "sys.stdout.buffer.write(b'caf\\xe9\\n')\n"
        "sys.stdout.buffer.flush()\n"
        "sys.stderr.buffer.write(b'bad\\xe9\\xff\\n')\n"
    )
    out: list[str] = []
    err: list[str] = []

    exit_code = LocalLauncher().launch([sys.executable, "-c", script], out.append, err.append)

    assert exit_code == 0
    assert out == ["caf\ufffd"]
    assert err == ["bad\ufffd\ufffd"]
