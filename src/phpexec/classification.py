"""Classification of interpreter output lines into errors and warnings."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Final

ERROR_MARKERS: Final[tuple[str, ...]] = ("Fatal error", "Error", "Parse error")
WARNING_MARKERS: Final[tuple[str, ...]] = ("Warning", "Notice")
INCLUDE_DIRECTIVES: Final[tuple[str, ...]] = ("require_once", "include_once")


def is_error(line: str) -> bool:
    """Return whether the line carries a PHP error message."""

    return _starts_with_marker(line, ERROR_MARKERS)


def is_warning(line: str) -> bool:
    """Return whether the line carries a PHP warning or notice."""

    return _starts_with_marker(line, WARNING_MARKERS)


def mentions_include(line: str) -> bool:
    """Return whether the line refers to an include directive."""

    return any(directive in line for directive in INCLUDE_DIRECTIVES)


@dataclass
class ClassificationState:
    """Flags and diagnostic text collected during a single checked invocation.

    Attributes:
        ignore_include_errors: Whether classified lines without an include
            directive are kept out of the diagnostic text.
        error_seen: Latched when an error line or any stderr line was seen.
        warning_seen: Latched when a warning line was seen.
        diagnostics: Lines recorded for the failure message.
    """

    ignore_include_errors: bool = False
    error_seen: bool = False
    warning_seen: bool = False
    diagnostics: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def consume_stdout(self, line: str) -> None:
        """Classify a standard output line."""

        error = is_error(line)
        warning = is_warning(line)
        if not (error or warning):
            return
        with self._lock:
            if not self.ignore_include_errors or mentions_include(line):
                self.diagnostics.append(line)
            if error:
                self.error_seen = True
            if warning:
                self.warning_seen = True

    def consume_stderr(self, line: str) -> None:
        """Record a standard error line; these always count as errors."""

        with self._lock:
            self.diagnostics.append(line)
            self.error_seen = True

    @property
    def failed(self) -> bool:
        """Return whether any error or warning was latched."""

        return self.error_seen or self.warning_seen

    @property
    def text(self) -> str:
        """Return the diagnostic text, one line per entry."""

        return "".join(f"{line}\n" for line in self.diagnostics)


def _starts_with_marker(line: str, markers: tuple[str, ...]) -> bool:
    trimmed = line.strip()
    for marker in markers:
        if trimmed.startswith(f"{marker}:") or trimmed.startswith(f"<b>{marker}</b>:"):
            return True
    return False
