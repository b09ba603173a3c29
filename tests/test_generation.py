# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the descriptor to plugin generation entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from taskforge.generator import ArtifactKind, Schema, generate, render
from taskforge.generator.errors import DescriptorLoadError, GenerationError, SchemaValidationError


def test_generate_valid_descriptor(schema: Schema, descriptor: dict[str, Any]) -> None:
    plugin = generate(schema, descriptor)

    assert plugin.identifier == "ReconAll"
    assert plugin.is_valid
    assert plugin.validation_errors == ()
    assert plugin.version == "1.0"
    assert plugin.schema is schema
    assert plugin.artifacts == render(schema, descriptor)


def test_generated_descriptor_is_read_only(schema: Schema, descriptor: dict[str, Any]) -> None:
    plugin = generate(schema, descriptor)
    descriptor["name"] = "changed"

    assert plugin.descriptor["name"] == "recon-all"
    with pytest.raises(TypeError):
        plugin.descriptor["name"] = "other"  # type: ignore[index]
    assert isinstance(plugin.descriptor["inputs"], tuple)


def test_generate_accepts_paths_and_text(descriptor_file: Path, descriptor: dict[str, Any]) -> None:
    from_path = generate(None, descriptor_file)
    from_text = generate(None, json.dumps(descriptor))

    assert from_path.artifacts == from_text.artifacts
    assert from_path.identifier == "ReconAll"


def test_generate_with_schema_document(tmp_path: Path, schema: Schema, descriptor: dict[str, Any]) -> None:
    schema_path = tmp_path / "schema.json"
    schema_path.write_text(json.dumps(schema.to_dict()), encoding="utf-8")

    plugin = generate(schema_path, descriptor)

    assert plugin.schema == schema


def test_strict_generation_aborts_on_validation_errors(schema: Schema, descriptor: dict[str, Any]) -> None:
    descriptor["inputs"][0]["type"] = "Text"

    with pytest.raises(SchemaValidationError) as excinfo:
        generate(schema, descriptor)

    assert [error.path for error in excinfo.value.errors] == [("inputs", 0, "type")]


def test_permissive_generation_keeps_errors(
    schema: Schema,
    descriptor: dict[str, Any],
    caplog: pytest.LogCaptureFixture,
) -> None:
    descriptor["author-email"] = "someone@example.org"

    with caplog.at_level(logging.WARNING, logger="taskforge.generator.generation"):
        plugin = generate(schema, descriptor, strict=False)

    assert not plugin.is_valid
    assert len(plugin.validation_errors) == 1
    assert "author-email" in plugin.validation_errors[0].message
    assert "class ReconAll(ClientTask)" in plugin.artifacts[ArtifactKind.CLIENT_DEFINITION]
    assert "validation error" in caplog.text


def test_permissive_generation_without_version(schema: Schema, descriptor: dict[str, Any]) -> None:
    del descriptor["tool-version"]

    plugin = generate(schema, descriptor, strict=False)

    assert plugin.version is None
    assert [error.path for error in plugin.validation_errors] == [("tool-version",)]


def test_permissive_generation_still_requires_a_name(schema: Schema, descriptor: dict[str, Any]) -> None:
    descriptor["name"] = 42

    with pytest.raises(GenerationError) as excinfo:
        generate(schema, descriptor, strict=False)

    assert excinfo.value.template == "descriptor"


def test_malformed_descriptor_is_fatal(schema: Schema) -> None:
    with pytest.raises(DescriptorLoadError):
        generate(schema, "{", strict=False)
