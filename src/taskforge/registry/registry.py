# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-process registry of loaded task types."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from threading import RLock
from types import ModuleType
from typing import Final

from ..generator.naming import underscore
from ..tasks.base import TaskBase
from .switcher import VersionSwitcher, make_version_switcher

LOGGER = logging.getLogger(__name__)

DEFAULT_NAMESPACE: Final[str] = "taskforge.generated"
GENERIC_NAMESPACE: Final[str] = "generic"


class PluginRegistry(Mapping[str, type[TaskBase]]):
    """Map canonical identifiers to loaded task or version switcher types.

    Entries live in two namespaces kept in step with each other: the generic
    mapping exposed through the :class:`~collections.abc.Mapping` protocol,
    and :attr:`namespace`, a module object where each entry is addressable as
    an attribute (``registry.namespace.Reconall``). Mutations made by the
    integrator run while holding :attr:`lock`.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.lock = RLock()
        self.namespace = ModuleType(namespace, f"Task types integrated into {namespace}.")
        self._entries: dict[str, type[TaskBase]] = {}
        self._switchers: dict[str, type[VersionSwitcher]] = {}

    def __getitem__(self, identifier: str) -> type[TaskBase]:
        with self.lock:
            return self._entries[identifier]

    def __iter__(self) -> Iterator[str]:
        with self.lock:
            return iter(tuple(self._entries))

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"PluginRegistry(namespace={self.namespace.__name__!r}, entries={sorted(self)!r})"

    def try_get(self, identifier: str) -> type[TaskBase] | None:
        """Return the entry for ``identifier`` or ``None`` when absent."""

        with self.lock:
            return self._entries.get(identifier)

    def module_name(self, identifier: str) -> str:
        """Return the module name generated definitions of ``identifier`` are loaded as."""

        return f"{self.namespace.__name__}.{underscore(identifier)}"

    def qualified_name(self, identifier: str) -> str:
        """Return the fully-qualified name of the entry registered as ``identifier``."""

        return f"{self.namespace.__name__}.{identifier}"

    def defined_in(self, identifier: str) -> list[str]:
        """Return the namespaces in which ``identifier`` is currently defined."""

        with self.lock:
            found: list[str] = []
            if identifier in self._entries:
                found.append(GENERIC_NAMESPACE)
            if isinstance(getattr(self.namespace, identifier, None), type):
                found.append(self.namespace.__name__)
            return found

    def bind(self, identifier: str, task: type[TaskBase]) -> None:
        """Make ``task`` the entry for ``identifier`` in both namespaces."""

        with self.lock:
            self._entries[identifier] = task
            setattr(self.namespace, identifier, task)

    def unbind(self, identifier: str) -> None:
        """Remove ``identifier`` from both namespaces, if present."""

        with self.lock:
            self._entries.pop(identifier, None)
            if identifier in vars(self.namespace):
                delattr(self.namespace, identifier)

    def replace(self, identifier: str, task: type[TaskBase], *, warn: bool = True) -> None:
        """Bind ``task`` under ``identifier``, dropping whatever was registered before.

        Args:
            identifier: Canonical identifier.
            task: Type to register.
            warn: Whether to log a collision warning when an entry is replaced.
        """

        with self.lock:
            namespaces = self.defined_in(identifier)
            if namespaces:
                if warn:
                    LOGGER.warning(
                        "%s is already defined in %s; replacing to avoid collisions",
                        identifier,
                        ", ".join(namespaces),
                    )
                self.unbind(identifier)
            self.bind(identifier, task)

    def version_switcher(self, identifier: str, base: type[TaskBase]) -> type[VersionSwitcher]:
        """Return the version switcher for ``identifier``, creating it on first use.

        Args:
            identifier: Canonical identifier the switcher dispatches for.
            base: Task base class used when the switcher has to be created.

        Returns:
            type[VersionSwitcher]: Switcher shared by every version of ``identifier``.
        """

        with self.lock:
            switcher = self._switchers.get(identifier)
            if switcher is None:
                switcher = make_version_switcher(identifier, base, module=self.namespace.__name__)
                self._switchers[identifier] = switcher
                LOGGER.debug("Created version switcher for %s", identifier)
            return switcher

    def switchers(self) -> dict[str, type[VersionSwitcher]]:
        """Return a snapshot of the version switchers keyed by identifier."""

        with self.lock:
            return dict(self._switchers)

    def reset(self) -> None:
        """Forget every entry and version switcher."""

        with self.lock:
            for identifier in tuple(self._entries):
                self.unbind(identifier)
            self._switchers.clear()


DEFAULT_REGISTRY: Final[PluginRegistry] = PluginRegistry()


__all__ = ["DEFAULT_NAMESPACE", "DEFAULT_REGISTRY", "GENERIC_NAMESPACE", "PluginRegistry"]
