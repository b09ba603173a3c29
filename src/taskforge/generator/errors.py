# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while generating and integrating task plugins."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Describe a single structural problem found in a descriptor.

    Attributes:
        path: Keys and indices leading from the descriptor root to the offending value.
        message: Human-readable explanation of the failure.
    """

    path: tuple[str | int, ...]
    message: str

    @property
    def location(self) -> str:
        """Return ``path`` rendered as a slash separated pointer.

        Returns:
            str: Pointer such as ``/inputs/0/id`` (``/`` for the document root).
        """

        return "/" + "/".join(str(part) for part in self.path)

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class TaskforgeError(RuntimeError):
    """Base class for every error raised by taskforge."""


class SchemaLoadError(TaskforgeError):
    """Raised when a schema document cannot be read or is not a usable schema."""


class DescriptorLoadError(TaskforgeError):
    """Raised when a descriptor document is malformed."""


class SchemaValidationError(TaskforgeError):
    """Raised by strict validation when a descriptor violates its schema."""

    def __init__(self, errors: Sequence[ValidationError]) -> None:
        """Create the error from the full list of validation ``errors``.

        Args:
            errors: Validation errors reported for the descriptor.
        """

        self.errors: tuple[ValidationError, ...] = tuple(errors)
        summary = "; ".join(str(error) for error in self.errors[:3])
        if len(self.errors) > 3:
            summary += f"; ... ({len(self.errors) - 3} more)"
        super().__init__(f"descriptor failed schema validation: {summary}")


class GenerationError(TaskforgeError):
    """Raised when a template cannot be rendered for a descriptor."""

    def __init__(self, template: str, message: str) -> None:
        """Create the error for ``template`` with a failure ``message``.

        Args:
            template: Name of the template that failed to render.
            message: Description of the rendering failure.
        """

        self.template = template
        super().__init__(f"{template}: {message}")


class LoadError(TaskforgeError):
    """Raised when generated source cannot be turned into a task type."""


class HelpPublishError(TaskforgeError):
    """Raised when the public help file of a plugin cannot be written."""


class ExportError(TaskforgeError):
    """Raised when an artifact set cannot be written to disk."""


class VersionSwitchError(TaskforgeError):
    """Raised when a version switcher has no implementation to bind to."""


class ConfigError(TaskforgeError):
    """Raised when configuration input is invalid."""


__all__ = [
    "ConfigError",
    "DescriptorLoadError",
    "ExportError",
    "GenerationError",
    "HelpPublishError",
    "LoadError",
    "SchemaLoadError",
    "SchemaValidationError",
    "TaskforgeError",
    "ValidationError",
    "VersionSwitchError",
]
