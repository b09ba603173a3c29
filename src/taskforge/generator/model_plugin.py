# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Model describing a plugin generated from a tool descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .artifacts import PARTIAL_KINDS, ArtifactSet, export
from .errors import ValidationError
from .schema import Schema
from .types import Descriptor

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from ..tasks.base import TaskBase


@dataclass(frozen=True, slots=True)
class GeneratedPlugin:
    """Generated sources for one descriptor together with their provenance.

    Attributes:
        identifier: Canonical identifier derived from the descriptor name.
        descriptor: Read-only view of the descriptor the plugin was generated from.
        schema: Schema the descriptor was validated against.
        validation_errors: Errors found when generation ran in permissive mode.
        artifacts: Generated definitions and UI templates.
    """

    identifier: str
    descriptor: Descriptor
    schema: Schema
    validation_errors: tuple[ValidationError, ...]
    artifacts: ArtifactSet

    @property
    def is_valid(self) -> bool:
        """Return ``True`` when the descriptor validated without errors."""

        return not self.validation_errors

    @property
    def version(self) -> str | None:
        """Return the tool version declared by the descriptor."""

        version = self.descriptor.get("tool-version")
        return version if isinstance(version, str) else None

    def raw_partial(self, partial: str) -> str | None:
        """Return the UI template named ``partial`` (``task_params``, ``show_params``, ``edit_help``)."""

        kind = PARTIAL_KINDS.get(partial)
        return None if kind is None else self.artifacts[kind]

    def to_directory(self, path: Path | str) -> Path:
        """Export the artifacts under ``path`` using the plugin directory layout.

        Args:
            path: Directory receiving the plugin directory.

        Returns:
            Path: Root directory of the exported plugin.
        """

        return export(self.artifacts, self.identifier, path)

    def integrate(
        self,
        *,
        register: bool = True,
        create_version_record: bool = False,
        multi_version: bool = False,
    ) -> type[TaskBase]:
        """Integrate the plugin into the default registry.

        See :meth:`taskforge.registry.integrator.PluginIntegrator.integrate`.
        """

        from ..registry.integrator import integrate

        return integrate(
            self,
            register=register,
            create_version_record=create_version_record,
            multi_version=multi_version,
        )


__all__ = ["GeneratedPlugin"]
