"""Exceptions raised when invoking the PHP interpreter."""

from __future__ import annotations

from pathlib import Path


class PhpExecError(RuntimeError):
    """Base class for every failure reported by a PHP invocation.

    Attributes:
        file: Optional hint naming the script that was being processed.
        output: Standard output captured before the failure, if any.
    """

    def __init__(self, message: str, file: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.file = file
        self.output = ""

    def append_output(self, output: str) -> None:
        """Attach captured standard output to the error."""

        self.output += output


class LaunchError(PhpExecError):
    """Raised when the interpreter process cannot be started."""


class PhpExitError(PhpExecError):
    """Raised on a non-zero exit code without any classified diagnostic."""


class PhpErrorError(PhpExecError):
    """Raised when the interpreter printed an error marker."""


class PhpWarningError(PhpExecError):
    """Raised when the interpreter printed a warning or notice marker."""


class FileWriteError(PhpExecError):
    """Raised when a temporary code snippet cannot be written to disk."""
