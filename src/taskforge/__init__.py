# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile declarative tool descriptors into task plugins and integrate them at runtime."""

from __future__ import annotations

from importlib import metadata

from .generator import GeneratedPlugin, Schema, classify, default_schema, generate
from .generator.errors import TaskforgeError

__all__ = ["GeneratedPlugin", "Schema", "TaskforgeError", "__version__", "classify", "default_schema", "generate"]

try:
    __version__ = metadata.version("taskforge")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
