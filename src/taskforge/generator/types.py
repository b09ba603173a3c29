# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for descriptor generation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]
Descriptor: TypeAlias = Mapping[str, JSONValue]

DEFAULT_SCHEMA_FILE: Final[str] = "boutiques.schema.json"
UNKNOWN_VERSION: Final[str] = "(unknown)"

__all__ = [
    "DEFAULT_SCHEMA_FILE",
    "UNKNOWN_VERSION",
    "Descriptor",
    "JSONPrimitive",
    "JSONValue",
]
