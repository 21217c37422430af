"""Configuration utilities for xadm.

The admin configuration is a flat YAML mapping, by default stored in
``~/.config/xadm/config.yaml``::

    hostname: xolo.myschool.edu
    admin: jdoe
    pw: "|security find-generic-password -s xolo -w"
    no_gui: true

The ``pw`` value may be a literal password, a path to a readable file holding
it, or a command prefixed with ``|`` whose output is the password.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

CONFIG_ENV_VAR = "XADM_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/xadm/config.yaml")
PASSWORD_COMMAND_PREFIX = "|"


class ConfigError(Exception):
    """Raised when the admin configuration cannot be loaded or used."""


class AdminConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    hostname: str
    admin: str
    pw: str | None = None
    no_gui: bool = False
    editor: str | None = None


def default_config_path() -> Path:
    """Return the config path from ``$XADM_CONFIG`` or the default location."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path or DEFAULT_CONFIG_PATH).expanduser()


def load_config(path: str | Path | None = None) -> AdminConfig:
    """Load the admin configuration from a YAML file.

    Args:
        path: Path to the YAML file. Defaults to :func:`default_config_path`.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, not a mapping or
            contains invalid values.
    """
    config_path = Path(path).expanduser() if path is not None else default_config_path()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigError(
            f"No xadm config at {config_path}. Please create one with your "
            "xolo server hostname and admin username."
        ) from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain key: value pairs")
    try:
        return AdminConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {config_path}: {exc}") from exc


def resolve_password(value: str) -> str:
    """Turn a configured ``pw`` value into the actual password.

    Raises:
        ConfigError: If a ``|`` command fails.
    """
    if value.startswith(PASSWORD_COMMAND_PREFIX):
        command = value[len(PASSWORD_COMMAND_PREFIX):].strip()
        try:
            result = subprocess.run(
                command, shell=True, capture_output=True, text=True, check=True
            )
        except subprocess.CalledProcessError as exc:
            raise ConfigError(
                f"Password command exited with status {exc.returncode}"
            ) from exc
        return result.stdout.strip()

    candidate = Path(value).expanduser()
    if candidate.is_file() and os.access(candidate, os.R_OK):
        return candidate.read_text(encoding="utf-8").strip()
    return value


__all__ = [
    "AdminConfig",
    "ConfigError",
    "default_config_path",
    "load_config",
    "resolve_password",
]
