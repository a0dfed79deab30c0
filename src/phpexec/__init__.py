"""Checked invocation of the PHP interpreter."""

from phpexec.classification import ClassificationState, is_error, is_warning
from phpexec.config import ExecutableConfig, load_config
from phpexec.errors import (
    FileWriteError,
    LaunchError,
    PhpErrorError,
    PhpExecError,
    PhpExitError,
    PhpWarningError,
)
from phpexec.executable import PhpExecutable, include_path_parameter
from phpexec.version import PhpVersion, parse_version_line

__all__ = [
    "ClassificationState",
    "ExecutableConfig",
    "FileWriteError",
    "LaunchError",
    "PhpErrorError",
    "PhpExecError",
    "PhpExecutable",
    "PhpExitError",
    "PhpVersion",
    "PhpWarningError",
    "include_path_parameter",
    "is_error",
    "is_warning",
    "load_config",
    "parse_version_line",
]
