# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for descriptor validation and plugin generation."""

from __future__ import annotations

from typing import Final

from .artifacts import ArtifactKind, ArtifactSet, export
from .errors import (
    DescriptorLoadError,
    ExportError,
    GenerationError,
    SchemaLoadError,
    SchemaValidationError,
    ValidationError,
)
from .generation import default_schema, generate
from .helpers import format_call
from .model_plugin import GeneratedPlugin
from .naming import classify, underscore
from .rendering import render
from .schema import Schema

__all__: Final[tuple[str, ...]] = (
    "ArtifactKind",
    "ArtifactSet",
    "DescriptorLoadError",
    "ExportError",
    "GeneratedPlugin",
    "GenerationError",
    "Schema",
    "SchemaLoadError",
    "SchemaValidationError",
    "ValidationError",
    "classify",
    "default_schema",
    "export",
    "format_call",
    "generate",
    "render",
    "underscore",
)
