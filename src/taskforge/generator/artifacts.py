# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Generated artifact bundles and their on-disk plugin layout."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Final

from .errors import ExportError
from .naming import underscore


class ArtifactKind(str, Enum):
    """Enumerate the sources produced for every generated plugin."""

    CLIENT_DEFINITION = "client-definition"
    WORKER_DEFINITION = "worker-definition"
    PARAMS_TEMPLATE = "params-template"
    SHOW_TEMPLATE = "show-template"
    HELP_TEMPLATE = "help-template"


# Relative export paths; ``{name}`` is the snake_case identifier.
EXPORT_LAYOUT: Final[Mapping[ArtifactKind, str]] = MappingProxyType(
    {
        ArtifactKind.CLIENT_DEFINITION: "client/{name}.py",
        ArtifactKind.WORKER_DEFINITION: "worker/{name}.py",
        ArtifactKind.PARAMS_TEMPLATE: "views/_task_params.html.j2",
        ArtifactKind.SHOW_TEMPLATE: "views/_show_params.html.j2",
        ArtifactKind.HELP_TEMPLATE: "views/public/edit_params_help.html",
    },
)

# Partial names used by views to request raw UI templates.
PARTIAL_KINDS: Final[Mapping[str, ArtifactKind]] = MappingProxyType(
    {
        "task_params": ArtifactKind.PARAMS_TEMPLATE,
        "show_params": ArtifactKind.SHOW_TEMPLATE,
        "edit_help": ArtifactKind.HELP_TEMPLATE,
    },
)


class ArtifactSet(Mapping[ArtifactKind, str]):
    """Immutable mapping from :class:`ArtifactKind` to generated source text.

    Lookups accept either the enum member or its string value. Two sets
    compare equal when their sources are identical.
    """

    __slots__ = ("_sources",)

    def __init__(self, sources: Mapping[ArtifactKind, str] | Mapping[str, str]) -> None:
        """Create the set, requiring a source for every artifact kind.

        Args:
            sources: Generated source text keyed by kind.

        Raises:
            ValueError: If a kind is missing or an unknown kind is supplied.
        """

        normalised = {ArtifactKind(kind): text for kind, text in sources.items()}
        missing = [kind.value for kind in ArtifactKind if kind not in normalised]
        if missing:
            raise ValueError(f"artifact set is missing {', '.join(missing)}")
        self._sources: Mapping[ArtifactKind, str] = MappingProxyType(
            {kind: normalised[kind] for kind in ArtifactKind},
        )

    def __getitem__(self, kind: ArtifactKind | str) -> str:
        try:
            return self._sources[ArtifactKind(kind)]
        except ValueError:
            raise KeyError(kind) from None

    def __iter__(self) -> Iterator[ArtifactKind]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{kind.value}={len(text)}" for kind, text in self._sources.items())
        return f"ArtifactSet({sizes})"


def export_paths(identifier: str, base_path: Path | str) -> dict[ArtifactKind, Path]:
    """Return the file each artifact of ``identifier`` is exported to.

    Args:
        identifier: Canonical identifier of the plugin.
        base_path: Directory receiving the plugin directory.

    Returns:
        dict[ArtifactKind, Path]: Target path keyed by artifact kind.
    """

    name = underscore(identifier)
    root = Path(base_path) / name
    return {kind: root / relative.format(name=name) for kind, relative in EXPORT_LAYOUT.items()}


def export(artifacts: ArtifactSet, identifier: str, base_path: Path | str) -> Path:
    """Write ``artifacts`` under ``base_path`` using the plugin directory layout.

    Existing files are overwritten. When writing fails midway, files written
    so far are left in place.

    Args:
        artifacts: Generated sources to write.
        identifier: Canonical identifier naming the plugin directory.
        base_path: Directory receiving the plugin directory.

    Returns:
        Path: Root directory of the exported plugin.

    Raises:
        ExportError: If a directory or file cannot be written.
    """

    root = Path(base_path) / underscore(identifier)
    for kind, target in export_paths(identifier, base_path).items():
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(artifacts[kind].encode("utf-8"))
        except OSError as exc:
            raise ExportError(f"unable to export {identifier} {kind.value} to {target}: {exc}") from exc
    return root


__all__ = [
    "EXPORT_LAYOUT",
    "PARTIAL_KINDS",
    "ArtifactKind",
    "ArtifactSet",
    "export",
    "export_paths",
]
