# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Settings controlling how generated plugins are integrated."""

from __future__ import annotations

import os
import socket
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .generator.errors import ConfigError
from .registry.registry import DEFAULT_NAMESPACE
from .tasks.base import ExecutionContext

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_FILENAME: Final[str] = "taskforge.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "taskforge"
ENV_PREFIX: Final[str] = "TASKFORGE_"


class Settings(BaseModel):
    """Integration settings shared by the registry, integrator and CLI."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    execution_context: ExecutionContext = ExecutionContext.CLIENT
    public_root: Path = Path("public")
    help_dir: str = "plugins/tasks/help_files"
    namespace: str = DEFAULT_NAMESPACE
    host: str = Field(default_factory=socket.gethostname)
    strict_validation: bool = True

    @field_validator("help_dir")
    @classmethod
    def _relative_help_dir(cls, value: str) -> str:
        cleaned = value.strip().strip("/")
        if not cleaned:
            raise ValueError("help_dir must name a directory below public_root")
        return cleaned

    @field_validator("namespace")
    @classmethod
    def _dotted_namespace(cls, value: str) -> str:
        if not all(part.isidentifier() for part in value.split(".")):
            raise ValueError(f"namespace must be a dotted module name, got {value!r}")
        return value

    @property
    def help_root(self) -> Path:
        """Return the directory receiving published help files."""

        return self.public_root / self.help_dir

    @property
    def is_worker(self) -> bool:
        return self.execution_context is ExecutionContext.WORKER


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc


def _file_settings(root: Path) -> dict[str, Any]:
    """Return the settings table found under ``root``, preferring ``taskforge.toml``."""

    config_path = root / CONFIG_FILENAME
    if config_path.is_file():
        document = _read_toml(config_path)
        section = document.get(PYPROJECT_SECTION_KEY, document)
    else:
        pyproject = root / PYPROJECT_FILENAME
        if not pyproject.is_file():
            return {}
        tool_section = _read_toml(pyproject).get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_SECTION_KEY}] configuration under {root} must be a table")
    return {str(key).replace("-", "_"): value for key, value in section.items()}


def _env_settings(env: Mapping[str, str]) -> dict[str, str]:
    fields = Settings.model_fields
    overrides: dict[str, str] = {}
    for key, value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX) :].lower()
        if name in fields:
            overrides[name] = value
    return overrides


def load_settings(root: Path | str | None = None, *, env: Mapping[str, str] | None = None) -> Settings:
    """Load settings from ``root`` and apply ``TASKFORGE_*`` environment overrides.

    ``taskforge.toml`` is read when present, otherwise the ``[tool.taskforge]``
    table of ``pyproject.toml``. A relative ``public_root`` is resolved against
    ``root``.

    Args:
        root: Project directory searched for configuration (current directory by default).
        env: Environment mapping (``os.environ`` by default).

    Returns:
        Settings: Validated settings.

    Raises:
        ConfigError: If a configuration file is unreadable or a value is invalid.
    """

    base = Path(root) if root is not None else Path.cwd()
    data = _file_settings(base)
    data.update(_env_settings(os.environ if env is None else env))
    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid taskforge configuration: {exc}") from exc
    if not settings.public_root.is_absolute():
        settings.public_root = base / settings.public_root
    return settings


__all__ = ["ENV_PREFIX", "Settings", "load_settings"]
