# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Records describing integrated tools and the store they are upserted into."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from threading import Lock
from typing import Any, Final, Protocol

DEFAULT_CATEGORY: Final[str] = "scientific tool"


@dataclass(frozen=True, slots=True)
class ToolRecord:
    """Registry metadata describing one tool, keyed by its task class."""

    task_class: str
    name: str
    description: str = ""
    category: str = DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class ToolVersionRecord:
    """Installation of one tool version on one host.

    Task instances receive a ``ToolVersionRecord`` as their ``tool_config``;
    its ``version`` selects the implementation of multi-version tasks.
    """

    tool: ToolRecord
    host: str
    version: str
    description: str = ""
    docker_image: str | None = None

    @property
    def key(self) -> tuple[str, str, str]:
        """Return the ``(task class, host, version)`` identity of the record."""

        return (self.tool.task_class, self.host, self.version)


class ToolStore(Protocol):
    """Create-unless-exists interface of the external tool metadata store."""

    def upsert_tool(self, task_class: str, fields: Mapping[str, Any]) -> ToolRecord:
        """Return the tool registered for ``task_class``, creating it from ``fields`` if absent."""

    def upsert_tool_version(
        self,
        tool: ToolRecord,
        host: str,
        version: str,
        fields: Mapping[str, Any],
    ) -> ToolVersionRecord:
        """Return the ``(tool, host, version)`` record, creating it from ``fields`` if absent."""


class InMemoryToolStore(ToolStore):
    """Thread-safe in-process :class:`ToolStore`."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._tools: dict[str, ToolRecord] = {}
        self._versions: dict[tuple[str, str, str], ToolVersionRecord] = {}

    def upsert_tool(self, task_class: str, fields: Mapping[str, Any]) -> ToolRecord:
        with self._lock:
            existing = self._tools.get(task_class)
            if existing is not None:
                return existing
            record = ToolRecord(
                task_class=task_class,
                name=str(fields["name"]),
                description=str(fields.get("description") or ""),
                category=str(fields.get("category") or DEFAULT_CATEGORY),
            )
            self._tools[task_class] = record
            return record

    def upsert_tool_version(
        self,
        tool: ToolRecord,
        host: str,
        version: str,
        fields: Mapping[str, Any],
    ) -> ToolVersionRecord:
        key = (tool.task_class, host, version)
        with self._lock:
            existing = self._versions.get(key)
            if existing is not None:
                return existing
            record = ToolVersionRecord(
                tool=tool,
                host=host,
                version=version,
                description=str(fields.get("description") or ""),
                docker_image=fields.get("docker_image"),
            )
            self._versions[key] = record
            return record

    def tools(self) -> tuple[ToolRecord, ...]:
        """Return every stored tool in creation order."""

        with self._lock:
            return tuple(self._tools.values())

    def tool_versions(self) -> tuple[ToolVersionRecord, ...]:
        """Return every stored tool version in creation order."""

        with self._lock:
            return tuple(self._versions.values())

    def find_tool(self, task_class: str) -> ToolRecord | None:
        """Return the tool stored for ``task_class``, if any."""

        with self._lock:
            return self._tools.get(task_class)

    def clear(self) -> None:
        """Remove every stored record."""

        with self._lock:
            self._tools.clear()
            self._versions.clear()


__all__ = [
    "DEFAULT_CATEGORY",
    "InMemoryToolStore",
    "ToolRecord",
    "ToolStore",
    "ToolVersionRecord",
]
