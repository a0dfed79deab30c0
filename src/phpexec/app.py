"""Application wiring for CLI-friendly PHP invocation."""

from __future__ import annotations

import json
from pathlib import Path

from phpexec.config import ExecutableConfig, config_to_dict, load_config, update_executable
from phpexec.execution.base import ProcessLauncher
from phpexec.executable import PhpExecutable
from phpexec.util.logging import get_logger


class AppConfigError(RuntimeError):
    """Raised when configuration or runtime setup fails."""


_LOGGER = get_logger("phpexec.app")


def initialize_config(workspace: Path) -> Path:
    """Create a default configuration file in the workspace.

    Args:
        workspace: Workspace directory where the config should be written.

    Returns:
        Path to the generated configuration file.

    Raises:
        AppConfigError: If the config file already exists.
    """

    workspace = workspace.resolve()
    config_path = workspace / "phpexec.yaml"
    if config_path.exists():
        raise AppConfigError(
            f"Config file already exists at {config_path}. Remove it or choose another "
            "workspace."
        )
    config = ExecutableConfig(temporary_script_file=workspace / ".phpexec" / "snippet.php")
    config_path.write_text(json.dumps(config_to_dict(config), indent=2), encoding="utf-8")
    _LOGGER.info("Initialized configuration at %s", config_path)
    return config_path


def create_executable(
    config_path: Path | None = None,
    executable: str | None = None,
    launcher: ProcessLauncher | None = None,
) -> PhpExecutable:
    """Build a PhpExecutable from a configuration file.

    Args:
        config_path: Optional config file or workspace directory.
        executable: Optional override for the PHP binary.
        launcher: Optional process launcher.

    Returns:
        Configured PhpExecutable.

    Raises:
        AppConfigError: If the configuration cannot be loaded.
    """

    try:
        config = load_config(config_path)
    except (OSError, ValueError, RuntimeError) as exc:
        raise AppConfigError(f"Unable to load configuration: {exc}") from exc
    if executable:
        config = update_executable(config, executable)
    return PhpExecutable(config, launcher=launcher)
