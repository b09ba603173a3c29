# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers converting JSON documents between mutable and read-only forms."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from .types import JSONValue


def freeze_json_value(value: JSONValue) -> JSONValue:
    """Return a recursively frozen view of ``value``.

    Args:
        value: JSON value composed of plain containers.

    Returns:
        JSONValue: Frozen JSON value (mappings become mapping proxies, arrays tuples).
    """

    if isinstance(value, Mapping):
        return MappingProxyType({str(key): freeze_json_value(item) for key, item in value.items()})
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(freeze_json_value(item) for item in value)
    return value


def thaw_json_value(value: JSONValue) -> JSONValue:
    """Return a plain JSON-compatible representation of ``value``.

    Args:
        value: Frozen JSON value that may contain mapping proxies or tuples.

    Returns:
        JSONValue: JSON-compatible value composed of built-in ``dict`` and
        ``list`` containers.
    """

    if isinstance(value, Mapping):
        return {str(key): thaw_json_value(item) for key, item in value.items()}
    if isinstance(value, (tuple, list)):
        return [thaw_json_value(item) for item in value]
    return value


__all__ = ["freeze_json_value", "thaw_json_value"]
