# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for schema loading and descriptor validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from taskforge.generator import Schema, default_schema
from taskforge.generator.errors import (
    DescriptorLoadError,
    SchemaLoadError,
    SchemaValidationError,
    ValidationError,
)

MINIMAL_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "type": "object",
    "properties": {"name": {"type": "string"}, "tags": {"type": "array"}},
    "required": ["name"],
}


def test_valid_descriptor_has_no_errors(schema: Schema, descriptor: dict[str, Any]) -> None:
    assert schema.validate(descriptor) == []
    assert schema.validate_strict(descriptor) == []


@pytest.mark.parametrize("field", ["name", "tool-version", "command-line", "schema-version", "inputs"])
def test_missing_required_field_is_located(schema: Schema, descriptor: dict[str, Any], field: str) -> None:
    del descriptor[field]

    errors = schema.validate(descriptor)

    assert any(error.path == (field,) for error in errors)


def test_nested_errors_point_at_the_offending_value(schema: Schema, descriptor: dict[str, Any]) -> None:
    del descriptor["inputs"][1]["id"]
    descriptor["inputs"][0]["type"] = "Text"

    errors = schema.validate(descriptor)

    paths = [error.path for error in errors]
    assert ("inputs", 0, "type") in paths
    assert ("inputs", 1, "id") in paths
    assert paths == sorted(paths, key=lambda path: tuple(str(part) for part in path))


def test_validation_error_renders_pointer() -> None:
    error = ValidationError(path=("inputs", 0, "id"), message="'id' is a required property")

    assert error.location == "/inputs/0/id"
    assert str(error) == "/inputs/0/id: 'id' is a required property"
    assert ValidationError(path=(), message="bad").location == "/"


def test_validate_strict_raises_with_every_error(schema: Schema, descriptor: dict[str, Any]) -> None:
    del descriptor["name"]
    del descriptor["command-line"]

    with pytest.raises(SchemaValidationError) as excinfo:
        schema.validate_strict(descriptor)

    assert {error.path for error in excinfo.value.errors} >= {("name",), ("command-line",)}
    assert "name" in str(excinfo.value)


def test_schema_accepts_path_text_and_mapping(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(MINIMAL_SCHEMA), encoding="utf-8")

    for source in (path, str(path), json.dumps(MINIMAL_SCHEMA), MINIMAL_SCHEMA):
        schema = Schema(source)
        assert schema.validate({"name": "x"}) == []
        assert [error.path for error in schema.validate({})] == [("name",)]


def test_schema_is_read_only_mapping() -> None:
    schema = Schema(MINIMAL_SCHEMA)

    assert schema["required"] == ("name",)
    assert set(schema) == {"$schema", "type", "properties", "required"}
    with pytest.raises(TypeError):
        schema["properties"]["name"] = {}  # type: ignore[index]
    assert schema.to_dict() == MINIMAL_SCHEMA


@pytest.mark.parametrize(
    "source",
    [
        "{not json",
        "[1, 2, 3]",
        {"type": 12},
    ],
)
def test_unusable_schema_raises_schema_load_error(source: object) -> None:
    with pytest.raises(SchemaLoadError):
        Schema(source)  # type: ignore[arg-type]


def test_missing_schema_file_raises_schema_load_error(tmp_path: Path) -> None:
    with pytest.raises(SchemaLoadError):
        Schema(tmp_path / "absent.json")


def test_malformed_descriptor_raises_descriptor_load_error(schema: Schema) -> None:
    with pytest.raises(DescriptorLoadError):
        schema.validate("{\"name\": ")
    with pytest.raises(DescriptorLoadError):
        schema.validate("\"just a string\"")


def test_descriptor_file_is_read_from_disk(schema: Schema, descriptor_file: Path) -> None:
    assert schema.validate(descriptor_file) == []
    assert schema.validate(str(descriptor_file)) == []


def test_default_schema_is_cached() -> None:
    assert default_schema() is default_schema()
    assert "inputs" in default_schema()["properties"]
