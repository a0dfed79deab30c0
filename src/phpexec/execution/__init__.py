"""Process launching package."""

from phpexec.execution.base import LineHandler, ProcessLauncher
from phpexec.execution.local_exec import LocalLauncher

__all__ = ["LineHandler", "LocalLauncher", "ProcessLauncher"]
