"""Configuration models and loaders for phpexec."""

from __future__ import annotations

import json
import tempfile
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

DEFAULT_EXECUTABLE = "php"
CONFIG_FILE_NAMES: tuple[str, ...] = ("phpexec.yaml", "phpexec.yml", "pyproject.toml")


def default_temporary_script_file() -> Path:
    """Return the default location of the reusable snippet script."""

    return Path(tempfile.gettempdir()) / "phpexec" / "snippet.php"


@dataclass(frozen=True)
class ExecutableConfig:
    """Configuration for a PHP executable.

    Attributes:
        executable: Path or name of the PHP binary.
        additional_parameters: Parameters placed before every call's arguments.
        ignore_include_errors: Whether to filter diagnostics about failed includes.
        log_php_output: Whether PHP output is logged at INFO instead of DEBUG.
        temporary_script_file: File used to materialize code snippets.
        env: Environment variables for the PHP process.
        include_path: Extra include paths. Not yet added to the command line.
        php_defines: PHP ini defines. Not yet added to the command line.
    """

    executable: str = DEFAULT_EXECUTABLE
    additional_parameters: str | None = None
    ignore_include_errors: bool = False
    log_php_output: bool = False
    temporary_script_file: Path = field(default_factory=default_temporary_script_file)
    env: dict[str, str] = field(default_factory=dict)
    include_path: list[str] = field(default_factory=list)
    php_defines: dict[str, str] = field(default_factory=dict)


def load_config(path: Path | None = None) -> ExecutableConfig:
    """Load executable configuration from disk.

    Args:
        path: Optional path to a configuration file or workspace directory.

    Returns:
        Parsed ExecutableConfig with defaults applied when no config exists.
    """

    config_path = _resolve_config_path(path)
    if config_path is None:
        return ExecutableConfig()

    if config_path.suffix in {".yaml", ".yml"}:
        raw_data = _load_yaml(config_path)
    elif config_path.suffix == ".toml":
        raw_data = _load_toml(config_path)
    else:
        raise ValueError(f"Unsupported config file type: {config_path}")

    return _parse_executable_config(raw_data, base_path=config_path.parent)


def config_to_dict(config: ExecutableConfig) -> dict[str, Any]:
    """Serialize an ExecutableConfig into a JSON-compatible dictionary."""

    return {
        "executable": config.executable,
        "additional_parameters": config.additional_parameters,
        "ignore_include_errors": config.ignore_include_errors,
        "log_php_output": config.log_php_output,
        "temporary_script_file": str(config.temporary_script_file),
        "env": dict(config.env),
        "include_path": list(config.include_path),
        "php_defines": dict(config.php_defines),
    }


def update_executable(config: ExecutableConfig, executable: str) -> ExecutableConfig:
    """Return a config copy pointing at another PHP binary."""

    return replace(config, executable=executable)


def _resolve_config_path(path: Path | None) -> Path | None:
    if path is None:
        candidate_paths = [Path(name) for name in CONFIG_FILE_NAMES]
    elif path.is_dir():
        candidate_paths = [path / name for name in CONFIG_FILE_NAMES]
    else:
        candidate_paths = [path]

    for candidate in candidate_paths:
        if candidate.exists():
            return candidate
    return None


def _load_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if path.name == "pyproject.toml":
        tool_config = data.get("tool", {}).get("phpexec", {})
        if not isinstance(tool_config, dict):
            raise ValueError("tool.phpexec must be a mapping.")
        return tool_config
    return data


def _load_yaml(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None
    if data is not None:
        if not isinstance(data, dict):
            raise ValueError("YAML configuration must be a mapping.")
        return data
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as exc:
        raise RuntimeError(
            "PyYAML is required to parse non-JSON YAML configuration files."
        ) from exc
    parsed = yaml.safe_load(text)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("YAML configuration must be a mapping.")
    return parsed


def _parse_executable_config(raw: dict[str, Any], base_path: Path) -> ExecutableConfig:
    defaults = ExecutableConfig()
    script_file = raw.get("temporary_script_file")
    if script_file is None:
        temporary_script_file = defaults.temporary_script_file
    else:
        temporary_script_file = Path(str(script_file))
        if not temporary_script_file.is_absolute():
            temporary_script_file = (base_path / temporary_script_file).resolve()

    return ExecutableConfig(
        executable=_optional_str(raw.get("executable")) or DEFAULT_EXECUTABLE,
        additional_parameters=_optional_str(raw.get("additional_parameters")),
        ignore_include_errors=bool(raw.get("ignore_include_errors", False)),
        log_php_output=bool(raw.get("log_php_output", False)),
        temporary_script_file=temporary_script_file,
        env=_parse_mapping(raw.get("env"), "env"),
        include_path=_parse_include_path(raw.get("include_path")),
        php_defines=_parse_mapping(raw.get("php_defines"), "php_defines"),
    )


def _parse_mapping(raw: Any, name: str) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{name} must be a mapping.")
    return {str(key): str(value) for key, value in raw.items()}


def _parse_include_path(raw: Any) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("include_path must be a list of paths.")
    return [str(entry) for entry in raw]


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
