# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Integrate generated plugins into a live registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ..generator.artifacts import ArtifactKind
from ..generator.errors import HelpPublishError
from ..generator.types import UNKNOWN_VERSION
from ..tasks.base import ClientTask, ExecutionContext, TaskBase, WorkerTask
from .loader import load_task_type
from .registry import DEFAULT_REGISTRY, PluginRegistry
from .store import InMemoryToolStore, ToolRecord, ToolStore, ToolVersionRecord

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from ..config import Settings
    from ..generator.model_plugin import GeneratedPlugin

LOGGER = logging.getLogger(__name__)

HELP_FILE_MODE: Final[int] = 0o775

_DEFINITIONS: Final[dict[ExecutionContext, tuple[ArtifactKind, type[TaskBase]]]] = {
    ExecutionContext.CLIENT: (ArtifactKind.CLIENT_DEFINITION, ClientTask),
    ExecutionContext.WORKER: (ArtifactKind.WORKER_DEFINITION, WorkerTask),
}

DEFAULT_STORE: Final[InMemoryToolStore] = InMemoryToolStore()


@dataclass(frozen=True, slots=True)
class ExternalRegistration:
    """Records upserted in the tool store for one integration."""

    tool: ToolRecord
    tool_version: ToolVersionRecord | None = None


class PluginIntegrator:
    """Load generated plugins into ``registry`` and record them in ``store``."""

    def __init__(self, registry: PluginRegistry, store: ToolStore, settings: Settings) -> None:
        self.registry = registry
        self.store = store
        self.settings = settings

    def integrate(
        self,
        plugin: GeneratedPlugin,
        *,
        register: bool = True,
        create_version_record: bool = False,
        multi_version: bool = False,
    ) -> type[TaskBase]:
        """Make ``plugin`` usable in this process.

        The definition matching the configured execution context is loaded
        first; nothing in the registry changes when loading fails. Once
        loaded, the type replaces any previous entry of the same identifier
        (with a warning unless ``multi_version`` is set), receives its UI
        assets and has its help page published. With ``multi_version`` the
        registry entry becomes the identifier's version switcher, which
        learns the descriptor's tool version.

        Args:
            plugin: Generated plugin to integrate.
            register: Whether to upsert the tool in the store.
            create_version_record: Whether a worker also upserts its tool version.
            multi_version: Whether to register the type behind a version switcher.

        Returns:
            type[TaskBase]: The loaded task type (never the switcher).

        Raises:
            LoadError: If the generated definition cannot be loaded.
            HelpPublishError: If the help page cannot be written.
        """

        identifier = plugin.identifier
        kind, base = _DEFINITIONS[self.settings.execution_context]
        task = load_task_type(
            plugin.artifacts[kind],
            identifier=identifier,
            module_name=self.registry.module_name(identifier),
            base=base,
        )

        with self.registry.lock:
            self.registry.replace(identifier, task, warn=not multi_version)
            task.attach_assets(plugin, help_file=self.help_file_path(identifier))
            self._publish_help(plugin)
            if multi_version:
                version = plugin.version or UNKNOWN_VERSION
                switcher = self.registry.version_switcher(identifier, base)
                switcher.known_versions[version] = task
                self.registry.bind(identifier, switcher)
                LOGGER.debug("Added version %s of %s to its switcher", version, identifier)

        if register:
            self.register(plugin, task, create_version_record=create_version_record)
        return task

    def register(
        self,
        plugin: GeneratedPlugin,
        task: type[TaskBase],
        *,
        create_version_record: bool = False,
    ) -> ExternalRegistration:
        """Upsert the store records describing ``task``.

        The tool record is keyed by the task's fully-qualified name. A tool
        version record for this host is only created by workers, and only
        when ``create_version_record`` is set. Existing records are returned
        untouched.
        """

        descriptor = plugin.descriptor
        name = str(descriptor["name"])
        version = plugin.version or UNKNOWN_VERSION
        description = descriptor.get("description") or ""
        docker_image = descriptor.get("docker-image")

        tool = self.store.upsert_tool(
            self.registry.qualified_name(task.__name__),
            {"name": name, "description": description},
        )
        if not (self.settings.is_worker and create_version_record):
            return ExternalRegistration(tool=tool)

        host = self.settings.host
        tool_version = self.store.upsert_tool_version(
            tool,
            host,
            version,
            {"description": f"{name} {version} on {host}", "docker_image": docker_image},
        )
        return ExternalRegistration(tool=tool, tool_version=tool_version)

    def help_file_path(self, identifier: str) -> str:
        """Return the public-root relative path of the help page of ``identifier``."""

        return str(Path(self.settings.help_dir) / f"{identifier}_help.html")

    def _publish_help(self, plugin: GeneratedPlugin) -> Path:
        directory = self.settings.help_root
        path = directory / f"{plugin.identifier}_help.html"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path.write_text(plugin.artifacts[ArtifactKind.HELP_TEMPLATE], encoding="utf-8")
            path.chmod(HELP_FILE_MODE)
        except OSError as exc:
            raise HelpPublishError(f"Unable to publish help file {path}: {exc}") from exc
        return path


def integrate(
    plugin: GeneratedPlugin,
    *,
    register: bool = True,
    create_version_record: bool = False,
    multi_version: bool = False,
) -> type[TaskBase]:
    """Integrate ``plugin`` into :data:`DEFAULT_REGISTRY` using settings from the current directory."""

    from ..config import load_settings

    integrator = PluginIntegrator(DEFAULT_REGISTRY, DEFAULT_STORE, load_settings())
    return integrator.integrate(
        plugin,
        register=register,
        create_version_record=create_version_record,
        multi_version=multi_version,
    )


__all__ = ["DEFAULT_STORE", "ExternalRegistration", "PluginIntegrator", "integrate"]
