# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Version switchers multiplexing several task types under one identifier.

A version switcher type stands in for a task identifier that has several
versions. Each instance starts unbound and behaves like a blank task with
stub UI assets. Once it receives a ``tool_config`` it binds, exactly once,
to the task type registered for that configuration's version: from then on
every attribute lookup and assignment is delegated to an instance of that
type, including ``__class__`` so ``isinstance`` reports the version type::

    switcher = make_version_switcher("Reconall", ClientTask)
    switcher.known_versions["1.1"] = ReconallV1
    switcher.known_versions["1.2"] = ReconallV2

    task = switcher(params={"subject": "s01"})
    task.tool_config = record_for_version_1_1
    isinstance(task, ReconallV1)  # True
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Final

from ..generator.errors import VersionSwitchError
from ..tasks.base import TaskBase

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..generator.model_plugin import GeneratedPlugin
    from .store import ToolVersionRecord

LOGGER = logging.getLogger(__name__)

NO_VERSION_PLACEHOLDER: Final[str] = " No version specified "

# Names resolved on the switcher itself even once bound.
_SWITCHER_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    {"_implementation", "_bind", "bound_version", "known_versions"},
)


class VersionSwitcher(TaskBase):
    """Base of the per-identifier version switcher types."""

    identifier: ClassVar[str] = ""
    known_versions: ClassVar[dict[str, type[TaskBase]]]

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        tool_config: ToolVersionRecord | None = None,
        **attributes: Any,
    ) -> None:
        """Create an unbound instance, binding it immediately when ``tool_config`` is given.

        Args:
            params: Launch parameters handed to the version implementation.
            tool_config: Configuration whose version selects the implementation.
            **attributes: Extra constructor arguments (``work_dir``...) for the implementation.

        Raises:
            VersionSwitchError: If binding is requested and no version is known.
        """

        object.__setattr__(self, "_implementation", None)
        object.__setattr__(self, "bound_version", None)
        object.__setattr__(self, "_tool_config", None)
        object.__setattr__(self, "_init_attributes", tuple(attributes))
        self.params = dict(params or {})
        for name, value in attributes.items():
            setattr(self, name, value)
        if tool_config is not None:
            self.tool_config = tool_config

    @property
    def tool_config(self) -> ToolVersionRecord | None:
        return self._tool_config

    @tool_config.setter
    def tool_config(self, value: ToolVersionRecord | None) -> None:
        # Stays unset when binding fails.
        if value is not None:
            self._bind(value)
        object.__setattr__(self, "_tool_config", value)

    def _bind(self, tool_config: ToolVersionRecord) -> None:
        """Delegate this instance to the implementation of ``tool_config.version``.

        Raises:
            VersionSwitchError: If the switcher knows no version at all.
        """

        switcher = type(self)
        known = switcher.known_versions
        version = tool_config.version
        version_class = known.get(version)
        if version_class is None:
            if not known:
                raise VersionSwitchError(f"No known versions for {switcher.__name__}")
            fallback, version_class = next(iter(known.items()))
            LOGGER.warning(
                "Unknown version %s for %s, using %s instead",
                version,
                switcher.__name__,
                fallback,
            )
            version = fallback

        instance_state = object.__getattribute__(self, "__dict__")
        constructor_arguments = {
            name: instance_state[name]
            for name in object.__getattribute__(self, "_init_attributes")
            if name in instance_state
        }
        assigned = {
            name: value
            for name, value in instance_state.items()
            if not name.startswith("_")
            and name not in constructor_arguments
            and name not in ("params", "bound_version")
        }
        implementation = version_class(params=self.params, tool_config=tool_config, **constructor_arguments)
        for name, value in assigned.items():
            setattr(implementation, name, value)
        object.__setattr__(self, "_implementation", implementation)
        object.__setattr__(self, "bound_version", version)
        LOGGER.debug("Bound %s instance to version %s", switcher.__name__, version)

    def __getattribute__(self, name: str) -> Any:
        implementation = object.__getattribute__(self, "_implementation")
        if implementation is None or name in _SWITCHER_ATTRIBUTES:
            return object.__getattribute__(self, name)
        return getattr(implementation, name)

    def __setattr__(self, name: str, value: Any) -> None:
        implementation = object.__getattribute__(self, "_implementation")
        if implementation is None or name in _SWITCHER_ATTRIBUTES:
            object.__setattr__(self, name, value)
        else:
            setattr(implementation, name, value)

    def __repr__(self) -> str:
        implementation = object.__getattribute__(self, "_implementation")
        if implementation is not None:
            return repr(implementation)
        return f"<{type(self).__name__} (unbound)>"

    @classmethod
    def public_path(cls, public_file: str) -> Path | None:
        return None

    @classmethod
    def generated_from(cls) -> GeneratedPlugin | None:
        return None

    @classmethod
    def raw_partial(cls, partial: str) -> str | None:
        """Return placeholder view partials until a version is known."""

        if partial in ("task_params", "show_params"):
            return NO_VERSION_PLACEHOLDER
        return None

    @classmethod
    def help_file_path(cls) -> str | None:
        return None


def make_version_switcher(
    identifier: str,
    base: type[TaskBase],
    *,
    module: str | None = None,
) -> type[VersionSwitcher]:
    """Create a new version switcher type for ``identifier``.

    Args:
        identifier: Canonical identifier the switcher is registered under.
        base: Task base class of the execution context (client or worker).
        module: Module name reported by the new type.

    Returns:
        type[VersionSwitcher]: Switcher type with an empty ``known_versions`` mapping.
    """

    namespace: dict[str, Any] = {
        "identifier": identifier,
        "known_versions": {},
        "__qualname__": identifier,
        "__doc__": f"Version switcher for {identifier} tasks.",
    }
    if module is not None:
        namespace["__module__"] = module
    return type(identifier, (VersionSwitcher, base), namespace)


__all__ = ["NO_VERSION_PLACEHOLDER", "VersionSwitcher", "make_version_switcher"]
