# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Entry points turning descriptors into generated plugins."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Final, cast

from .errors import DescriptorLoadError, GenerationError
from .io import DocumentSource, expand_json
from .model_plugin import GeneratedPlugin
from .naming import classify
from .rendering import render
from .schema import Schema
from .types import DEFAULT_SCHEMA_FILE, Descriptor
from .utils import freeze_json_value

LOGGER = logging.getLogger(__name__)

SCHEMA_DIR: Final[Path] = Path(__file__).resolve().parent / "schemas"


@lru_cache(maxsize=1)
def default_schema() -> Schema:
    """Return the packaged schema used when no explicit schema is supplied."""

    return Schema(SCHEMA_DIR / DEFAULT_SCHEMA_FILE)


def generate(
    schema: Schema | DocumentSource | None,
    descriptor: DocumentSource,
    strict: bool = True,
) -> GeneratedPlugin:
    """Validate ``descriptor`` against ``schema`` and render its plugin.

    In strict mode any validation error aborts generation. In permissive mode
    the errors are recorded on the returned plugin and rendering is attempted
    regardless; template failures still raise :class:`GenerationError`.

    Args:
        schema: Schema instance, schema document, or ``None`` for :func:`default_schema`.
        descriptor: Path, JSON text, or mapping holding the descriptor.
        strict: Whether validation errors abort generation.

    Returns:
        GeneratedPlugin: Generated artifacts with their provenance.

    Raises:
        DescriptorLoadError: If the descriptor is malformed.
        SchemaLoadError: If ``schema`` cannot be loaded.
        SchemaValidationError: In strict mode, when the descriptor is invalid.
        GenerationError: If a template cannot be rendered.
    """

    document = expand_json(descriptor, error_cls=DescriptorLoadError, context="descriptor")
    if schema is None:
        active_schema = default_schema()
    elif isinstance(schema, Schema):
        active_schema = schema
    else:
        active_schema = Schema(schema)

    errors = active_schema.validate_strict(document) if strict else active_schema.validate(document)
    if errors:
        LOGGER.warning(
            "Generating %r despite %d validation error(s)",
            document.get("name"),
            len(errors),
        )

    name = document.get("name")
    if not isinstance(name, str):
        raise GenerationError("descriptor", "expected 'name' to be a string")
    identifier = classify(name)
    artifacts = render(active_schema, document, identifier=identifier)
    return GeneratedPlugin(
        identifier=identifier,
        descriptor=cast(Descriptor, freeze_json_value(document)),
        schema=active_schema,
        validation_errors=tuple(errors),
        artifacts=artifacts,
    )


__all__ = ["SCHEMA_DIR", "default_schema", "generate"]
