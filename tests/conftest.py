# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from taskforge.config import Settings
from taskforge.generator import GeneratedPlugin, Schema, default_schema, generate
from taskforge.registry import InMemoryToolStore, PluginIntegrator, PluginRegistry
from taskforge.tasks import ExecutionContext

RECON_DESCRIPTOR: dict[str, Any] = {
    "name": "recon-all",
    "tool-version": "1.0",
    "description": "Cortical surface reconstruction.",
    "command-line": "recon-all [SUBJECT] [INPUT] [DEBUG] [THREADS] [MODE]",
    "docker-image": "example/recon:1.0",
    "schema-version": "0.5",
    "inputs": [
        {
            "id": "subject",
            "name": "Subject ID",
            "type": "String",
            "value-key": "[SUBJECT]",
            "command-line-flag": "-s",
        },
        {
            "id": "input_file",
            "name": "Input image",
            "type": "File",
            "value-key": "[INPUT]",
            "command-line-flag": "-i",
        },
        {
            "id": "debug",
            "name": "Debug",
            "type": "Flag",
            "value-key": "[DEBUG]",
            "command-line-flag": "--debug",
            "optional": True,
        },
        {
            "id": "threads",
            "name": "Threads",
            "type": "Number",
            "value-key": "[THREADS]",
            "command-line-flag": "-t",
            "optional": True,
            "integer": True,
            "minimum": 1,
            "maximum": 64,
            "default-value": 4,
        },
        {
            "id": "mode",
            "name": "Mode",
            "type": "String",
            "value-key": "[MODE]",
            "command-line-flag": "-m",
            "optional": True,
            "value-choices": ["fast", "full"],
            "default-value": "full",
        },
    ],
    "output-files": [
        {
            "id": "report",
            "name": "Report",
            "path-template": "[INPUT].report.txt",
            "path-template-stripped-extensions": [".nii.gz", ".nii"],
        },
        {
            "id": "log",
            "name": "Log",
            "path-template": "recon.log",
            "optional": True,
        },
    ],
}


@pytest.fixture
def descriptor() -> dict[str, Any]:
    """Return a fresh copy of a valid descriptor."""

    return copy.deepcopy(RECON_DESCRIPTOR)


@pytest.fixture
def descriptor_v2() -> dict[str, Any]:
    """Return the same tool at version 2.0."""

    descriptor = copy.deepcopy(RECON_DESCRIPTOR)
    descriptor["tool-version"] = "2.0"
    descriptor["docker-image"] = "example/recon:2.0"
    return descriptor


@pytest.fixture
def descriptor_file(tmp_path: Path, descriptor: dict[str, Any]) -> Path:
    path = tmp_path / "recon-all.json"
    path.write_text(json.dumps(descriptor), encoding="utf-8")
    return path


@pytest.fixture
def schema() -> Schema:
    return default_schema()


@pytest.fixture
def plugin(schema: Schema, descriptor: dict[str, Any]) -> GeneratedPlugin:
    return generate(schema, descriptor)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Return client settings publishing help files below ``tmp_path``."""

    return Settings(public_root=tmp_path / "public", host="testhost")


@pytest.fixture
def worker_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"execution_context": ExecutionContext.WORKER})


@pytest.fixture
def registry() -> PluginRegistry:
    return PluginRegistry()


@pytest.fixture
def store() -> InMemoryToolStore:
    return InMemoryToolStore()


@pytest.fixture
def integrator(registry: PluginRegistry, store: InMemoryToolStore, settings: Settings) -> PluginIntegrator:
    return PluginIntegrator(registry, store, settings)


@pytest.fixture
def worker_integrator(
    registry: PluginRegistry,
    store: InMemoryToolStore,
    worker_settings: Settings,
) -> PluginIntegrator:
    return PluginIntegrator(registry, store, worker_settings)
