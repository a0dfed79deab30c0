"""CLI entrypoints for phpexec."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from phpexec.app import AppConfigError, create_executable, initialize_config
from phpexec.errors import PhpExecError
from phpexec.executable import PhpExecutable, include_path_parameter
from phpexec.util.logging import configure_logging

app = typer.Typer(help="Run the PHP interpreter with checked, classified output.")

_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to a config file or workspace directory.",
)
_EXECUTABLE_OPTION = typer.Option(
    None,
    "--php",
    help="PHP binary to use instead of the configured one.",
)


@app.callback()
def main(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Logging level (e.g., DEBUG, INFO, WARNING).",
    ),
) -> None:
    """Configure CLI-level options."""

    configure_logging(log_level)


@app.command()
def init(workspace: Path = typer.Argument(Path("."))) -> None:
    """Write a default configuration file into a workspace."""

    try:
        config_path = initialize_config(workspace)
    except AppConfigError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(f"Created configuration at {config_path}")


@app.command()
def version(
    config: Optional[Path] = _CONFIG_OPTION,
    php: Optional[str] = _EXECUTABLE_OPTION,
) -> None:
    """Print the detected PHP generation."""

    executable = _load(config, php)
    try:
        detected = executable.get_version()
    except PhpExecError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(detected.name)


@app.command(
    "run",
    context_settings={"ignore_unknown_options": True},
)
def run_command(
    arguments: List[str] = typer.Argument(..., help="Arguments passed to PHP."),
    config: Optional[Path] = _CONFIG_OPTION,
    php: Optional[str] = _EXECUTABLE_OPTION,
) -> None:
    """Run PHP and fail when its output reports errors or warnings."""

    executable = _load(config, php)
    try:
        output = executable.run_captured(arguments)
    except PhpExecError as exc:
        if exc.output:
            typer.echo(exc.output, nl=False)
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(output, nl=False)


@app.command("snippet")
def snippet_command(
    code: str = typer.Argument(..., help="PHP code to run, without the opening tag."),
    php_args: str = typer.Option("", "--php-args", help="Arguments for PHP itself."),
    script_args: str = typer.Option("", "--script-args", help="Arguments for the snippet."),
    config: Optional[Path] = _CONFIG_OPTION,
    php: Optional[str] = _EXECUTABLE_OPTION,
) -> None:
    """Run an inline PHP snippet through a temporary script."""

    executable = _load(config, php)
    try:
        output = executable.run_snippet(php_args, code, script_args)
    except PhpExecError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(output, nl=False)


@app.command("include-path")
def include_path_command(
    paths: List[str] = typer.Argument(None, help="Include path entries."),
) -> None:
    """Print the PHP parameter that sets the include path."""

    typer.echo(include_path_parameter(paths or []))


def _load(config: Path | None, php: str | None) -> PhpExecutable:
    try:
        return create_executable(config, executable=php)
    except AppConfigError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc
