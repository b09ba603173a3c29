# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers normalising JSON documents given as paths, text, or mappings."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import cast

from .errors import TaskforgeError
from .types import JSONValue

DocumentSource = str | Path | Mapping[str, JSONValue]


def expand_json(
    source: DocumentSource,
    *,
    error_cls: type[TaskforgeError],
    context: str,
) -> dict[str, JSONValue]:
    """Return ``source`` as a plain JSON object.

    ``source`` may be a filesystem path, raw JSON text, or an already parsed
    mapping. Strings naming an existing file are read from disk; any other
    string is parsed as JSON text.

    Args:
        source: Path, JSON text, or mapping to normalise.
        error_cls: Error type raised when the document is malformed.
        context: Human-readable label used in error messages.

    Returns:
        dict[str, JSONValue]: Parsed JSON object composed of plain containers.

    Raises:
        TaskforgeError: ``error_cls`` when the document cannot be read or parsed,
            or is not a JSON object.
    """

    if isinstance(source, Mapping):
        return _ensure_json_object(source, error_cls=error_cls, context=context)

    if isinstance(source, Path) or _is_file(source):
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise error_cls(f"{context}: unable to read {path}: {exc}") from exc
        label = f"{context} ({path})"
    elif isinstance(source, str):
        text = source
        label = context
    else:
        raise error_cls(f"{context}: unsupported document type {type(source).__name__}")

    try:
        payload = cast(JSONValue, json.loads(text))
    except json.JSONDecodeError as exc:
        raise error_cls(f"{label}: failed to parse JSON: {exc}") from exc
    return _ensure_json_object(payload, error_cls=error_cls, context=label)


def _is_file(candidate: object) -> bool:
    """Return ``True`` when ``candidate`` is a string naming an existing file."""

    if not isinstance(candidate, str) or not candidate or "\n" in candidate:
        return False
    try:
        return Path(candidate).is_file()
    except (OSError, ValueError):
        return False


def _ensure_json_object(
    value: JSONValue,
    *,
    error_cls: type[TaskforgeError],
    context: str,
) -> dict[str, JSONValue]:
    """Return ``value`` as a plain JSON object or raise ``error_cls``.

    Args:
        value: Parsed JSON payload.
        error_cls: Error type raised on mismatch.
        context: Human-readable label used in error messages.

    Returns:
        dict[str, JSONValue]: Deep copy of ``value`` using ``dict``/``list`` containers.

    Raises:
        TaskforgeError: ``error_cls`` when ``value`` is not a JSON object.
    """

    if not isinstance(value, Mapping):
        raise error_cls(f"{context}: expected a JSON object")
    return cast(dict[str, JSONValue], _plain(value, error_cls=error_cls, context=context))


def _plain(value: JSONValue, *, error_cls: type[TaskforgeError], context: str) -> JSONValue:
    """Recursively copy ``value`` into plain JSON containers."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _plain(item, error_cls=error_cls, context=f"{context}.{key}") for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [_plain(item, error_cls=error_cls, context=f"{context}[]") for item in value]
    raise error_cls(f"{context}: value is not valid JSON")


__all__ = ["DocumentSource", "expand_json"]
