"""Process launcher base types and interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

LineHandler = Callable[[str], None]


class ProcessLauncher(ABC):
    """Abstract base class for launching a process with streamed output."""

    @abstractmethod
    def launch(
        self,
        command: list[str],
        on_stdout: LineHandler,
        on_stderr: LineHandler,
        env: dict[str, str] | None = None,
    ) -> int:
        """Run a command and deliver its output line by line.

        Args:
            command: Argument vector; the first entry is the executable.
            on_stdout: Called for every standard output line, without the line ending.
            on_stderr: Called for every standard error line, without the line ending.
            env: Optional environment variables merged over the current environment.

        Returns:
            Exit code of the process.

        Raises:
            LaunchError: If the process cannot be started.
        """
