"""PHP executable wrapper with output classification."""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Iterable, Sequence

from phpexec.classification import ClassificationState
from phpexec.config import ExecutableConfig
from phpexec.errors import (
    FileWriteError,
    LaunchError,
    PhpErrorError,
    PhpExecError,
    PhpExitError,
    PhpWarningError,
)
from phpexec.execution.base import LineHandler, ProcessLauncher
from phpexec.execution.local_exec import LocalLauncher
from phpexec.util.logging import (
    PHP_ERROR_PREFIX,
    PHP_OUTPUT_PREFIX,
    get_logger,
    log_php_line,
)
from phpexec.version import VERSION_FLAG, PhpVersion, is_version_line, parse_version_line

INCLUDE_PATH_FLAG = "-d include_path"
SNIPPET_PREFIX = "<?php \n"

Arguments = str | Sequence[str]


def include_path_parameter(paths: Iterable[str]) -> str:
    """Build the PHP parameter that sets the include path.

    Every entry is preceded by the platform path separator, including the
    first one.

    Args:
        paths: Include path entries.

    Returns:
        The complete parameter, e.g. ``-d include_path=":/a:/b"``.
    """

    value = "".join(f"{os.pathsep}{path}" for path in paths)
    return f'{INCLUDE_PATH_FLAG}="{value}"'


class PhpExecutable:
    """Run a PHP interpreter and turn its output into checked results."""

    def __init__(
        self,
        config: ExecutableConfig | None = None,
        launcher: ProcessLauncher | None = None,
    ) -> None:
        """Initialize the executable.

        Args:
            config: Executable configuration. Defaults to ``php`` on the PATH.
            launcher: Process launcher used for every invocation.
        """

        self._config = config or ExecutableConfig()
        self._launcher = launcher or LocalLauncher()
        self._version: PhpVersion | None = None
        self._logger = get_logger(self.__class__.__name__)

    @classmethod
    def from_path(cls, executable: str, launcher: ProcessLauncher | None = None) -> PhpExecutable:
        """Create an executable for the given binary with default settings."""

        return cls(ExecutableConfig(executable=executable), launcher=launcher)

    @property
    def config(self) -> ExecutableConfig:
        return self._config

    def build_command(self, arguments: Arguments) -> list[str]:
        """Return the argument vector for a call.

        The binary comes first, then the additional parameters from the
        configuration, then the call-specific arguments.
        """

        command = [self._config.executable]
        if self._config.additional_parameters is not None:
            command.extend(_split(self._config.additional_parameters))
        command.extend(_split(arguments))
        return command

    def run(self, arguments: Arguments, on_stdout: LineHandler, on_stderr: LineHandler) -> int:
        """Execute PHP with the given arguments.

        Args:
            arguments: Argument string or sequence for PHP.
            on_stdout: Handler for standard output lines.
            on_stderr: Handler for standard error lines.

        Returns:
            Exit code of PHP.

        Raises:
            LaunchError: If PHP cannot be started or the arguments cannot be parsed.
        """

        command = self.build_command(arguments)
        self._logger.debug("Executing %s", shlex.join(command))
        return self._launcher.launch(
            command,
            on_stdout,
            on_stderr,
            env=dict(self._config.env) or None,
        )

    def run_checked(
        self,
        arguments: Arguments,
        file: Path | None = None,
        on_stdout: LineHandler | None = None,
    ) -> int:
        """Execute PHP and fail if its output reports errors or warnings.

        PHP frequently exits with code 0 after printing a fatal error, so the
        output is scanned for diagnostic markers in addition to checking the
        exit code. A warning takes precedence over an error when both appear.

        Args:
            arguments: Argument string or sequence for PHP.
            file: Optional hint naming the file being processed.
            on_stdout: Optional handler for standard output lines.

        Returns:
            Exit code of PHP (always 0 on return).

        Raises:
            PhpWarningError: If a warning or notice was printed.
            PhpErrorError: If an error was printed or stderr received output.
            PhpExitError: If PHP exited non-zero without any diagnostic.
            LaunchError: If PHP cannot be started or the arguments cannot be parsed.
        """

        state = ClassificationState(ignore_include_errors=self._config.ignore_include_errors)

        def consume_stdout(line: str) -> None:
            log_php_line(self._logger, PHP_OUTPUT_PREFIX, line, echo=self._config.log_php_output)
            if on_stdout is not None:
                on_stdout(line)
            state.consume_stdout(line)

        def consume_stderr(line: str) -> None:
            log_php_line(self._logger, PHP_ERROR_PREFIX, line, echo=self._config.log_php_output)
            state.consume_stderr(line)

        exit_code = self.run(arguments, consume_stdout, consume_stderr)
        if exit_code == 0 and not state.failed:
            return exit_code

        message = (
            f"Failed to execute PHP with arguments '{_describe(arguments)}' [Return: {exit_code}]"
        )
        diagnostics = state.text
        if diagnostics:
            message = f"{message}:\n{diagnostics}"

        if state.warning_seen:
            raise PhpWarningError(message, file=file)
        if state.error_seen:
            raise PhpErrorError(message, file=file)
        raise PhpExitError(message, file=file)

    def run_captured(self, arguments: Arguments, file: Path | None = None) -> str:
        """Execute PHP and return its standard output.

        Args:
            arguments: Argument string or sequence for PHP.
            file: Optional hint naming the file being processed.

        Returns:
            The standard output, each line terminated by a newline.

        Raises:
            PhpExecError: If the execution failed; partial output is attached.
        """

        lines: list[str] = []
        try:
            self.run_checked(arguments, file=file, on_stdout=lines.append)
        except PhpExecError as exc:
            exc.append_output(_join_lines(lines))
            raise
        return _join_lines(lines)

    def get_version(self) -> PhpVersion:
        """Return the PHP generation, probing the binary on first use.

        Raises:
            PhpExecError: If ``php -v`` fails.
        """

        if self._version is not None:
            return self._version

        banner: list[str] = []

        def consume(line: str) -> None:
            if not banner and is_version_line(line):
                banner.append(line)

        self.run_checked(VERSION_FLAG, on_stdout=consume)
        if not banner:
            self._logger.error("Cannot find out PHP version: no version line in output")
            return PhpVersion.UNKNOWN

        self._version = parse_version_line(banner[0], logger=self._logger)
        self._logger.debug("PHP version: %s", self._version.name)
        return self._version

    def run_snippet(
        self,
        arguments: Arguments | None,
        code: str,
        code_arguments: Arguments | None = None,
    ) -> str:
        """Write a code snippet to the temporary script and execute it.

        The script file is reused across calls, so concurrent snippets on the
        same executable must be serialized by the caller.

        Args:
            arguments: Arguments for PHP placed before the script path.
            code: PHP code without the opening tag.
            code_arguments: Arguments passed to the script itself.

        Returns:
            The standard output of the snippet.

        Raises:
            FileWriteError: If the script cannot be written.
            PhpExecError: If the execution failed.
        """

        snippet = self._config.temporary_script_file
        try:
            snippet.parent.mkdir(parents=True, exist_ok=True)
            snippet.unlink(missing_ok=True)
            snippet.write_text(SNIPPET_PREFIX + code, encoding="utf-8")
        except OSError as exc:
            raise FileWriteError(
                f"Error writing php temporary code snippet to file: {exc}",
                file=snippet,
            ) from exc

        command = [*_split(arguments), str(snippet.absolute()), *_split(code_arguments)]
        return self.run_captured(command, file=snippet)

    def include_path_parameter(self, paths: Iterable[str]) -> str:
        """Build the include path parameter; see :func:`include_path_parameter`."""

        return include_path_parameter(paths)


def _split(arguments: Arguments | None) -> list[str]:
    if not arguments:
        return []
    if isinstance(arguments, str):
        try:
            return shlex.split(arguments)
        except ValueError as exc:
            raise LaunchError(f"Invalid PHP arguments {arguments!r}: {exc}") from exc
    return list(arguments)


def _describe(arguments: Arguments) -> str:
    if isinstance(arguments, str):
        return arguments
    return shlex.join(arguments)


def _join_lines(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)
