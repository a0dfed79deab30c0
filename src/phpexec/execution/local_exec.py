"""Local process launcher with line-by-line output streaming."""

from __future__ import annotations

import os
import subprocess
import threading
import time
from typing import IO

from phpexec.errors import LaunchError
from phpexec.execution.base import LineHandler, ProcessLauncher
from phpexec.util.logging import get_logger


class LocalLauncher(ProcessLauncher):
    """Launch processes on the local host."""

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__name__)

    def launch(
        self,
        command: list[str],
        on_stdout: LineHandler,
        on_stderr: LineHandler,
        env: dict[str, str] | None = None,
    ) -> int:
        """Run a command locally, streaming stdout and stderr to the handlers.

        Standard output is read on the calling thread and standard error on a
        helper thread. Both streams are drained before the exit code is
        returned. If a handler raises, the process is killed and the
        exception propagates.

        Args:
            command: Argument vector; the first entry is the executable.
            on_stdout: Handler for standard output lines.
            on_stderr: Handler for standard error lines.
            env: Optional environment variables to include.

        Returns:
            Exit code of the process.
        """

        if not command:
            raise ValueError("Command must contain at least one argument.")

        merged_env = os.environ.copy()
        if env:
            merged_env.update(env)

        start = time.monotonic()
        try:
            process = subprocess.Popen(
                command,
                env=merged_env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except (OSError, ValueError) as exc:
            raise LaunchError(f"Unable to start {command[0]!r}: {exc}") from exc

        stderr_failure: list[BaseException] = []
        stderr_reader = threading.Thread(
            target=_pump,
            args=(process.stderr, on_stderr, stderr_failure),
            daemon=True,
        )
        stderr_reader.start()
        try:
            _pump(process.stdout, on_stdout, None)
            stderr_reader.join()
            exit_code = process.wait()
        except BaseException:
            process.kill()
            process.wait()
            stderr_reader.join()
            raise
        finally:
            for stream in (process.stdout, process.stderr):
                if stream is not None:
                    stream.close()

        if stderr_failure:
            raise stderr_failure[0]

        self._logger.debug(
            "Process %s finished with exit code %s in %.2fs.",
            command[0],
            exit_code,
            time.monotonic() - start,
        )
        return exit_code


def _pump(
    stream: IO[str] | None,
    handler: LineHandler,
    failures: list[BaseException] | None,
) -> None:
    if stream is None:
        return
    try:
        for line in stream:
            handler(line.rstrip("\r\n"))
    except BaseException as exc:
        if failures is None:
            raise
        failures.append(exc)
        # Keep draining so the child never blocks on a full pipe.
        for _ in stream:
            pass
