# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface validating, generating and integrating tool descriptors."""

from __future__ import annotations

from pathlib import Path
from typing import Final

import typer

from ..config import Settings, load_settings
from ..generator import Schema, classify, default_schema, generate
from ..generator.errors import SchemaValidationError, TaskforgeError
from ..logging import fail, info, ok, report_validation_errors, section, warn
from ..registry import DEFAULT_STORE, PluginIntegrator, PluginRegistry
from .typer_ext import create_typer

EXIT_INVALID: Final[int] = 1
EXIT_ERROR: Final[int] = 2

app = create_typer(
    name="taskforge",
    help="Compile tool descriptors into task plugins.",
    no_args_is_help=True,
    add_completion=False,
)


def _load_schema(schema: Path | None) -> Schema:
    return default_schema() if schema is None else Schema(schema)


def _settings(root: Path) -> Settings:
    try:
        return load_settings(root)
    except TaskforgeError as exc:
        fail(str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc


@app.command("validate")
def validate_command(
    descriptor: Path = typer.Argument(..., exists=True, dir_okay=False, help="Descriptor JSON file."),
    schema: Path | None = typer.Option(None, "--schema", "-s", exists=True, dir_okay=False, help="Schema JSON file."),
) -> None:
    """Validate DESCRIPTOR against the schema, listing every error."""

    try:
        errors = _load_schema(schema).validate(descriptor)
    except TaskforgeError as exc:
        fail(str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc
    if errors:
        fail(f"{descriptor} has {len(errors)} validation error(s):")
        report_validation_errors(errors, fatal=True)
        raise typer.Exit(code=EXIT_INVALID)
    ok(f"{descriptor} is valid")


@app.command("classify")
def classify_command(name: str = typer.Argument(..., help="Free-form tool name.")) -> None:
    """Print the canonical identifier derived from NAME."""

    typer.echo(classify(name))


@app.command("generate")
def generate_command(
    descriptor: Path = typer.Argument(..., exists=True, dir_okay=False, help="Descriptor JSON file."),
    output: Path = typer.Argument(..., file_okay=False, help="Directory receiving the plugin directory."),
    schema: Path | None = typer.Option(None, "--schema", "-s", exists=True, dir_okay=False, help="Schema JSON file."),
    permissive: bool | None = typer.Option(
        None,
        "--permissive/--strict",
        help="Generate despite validation errors (defaults to the configured strictness).",
    ),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Project root holding the configuration."),
) -> None:
    """Generate the plugin of DESCRIPTOR and export it under OUTPUT."""

    settings = _settings(root)
    strict = settings.strict_validation if permissive is None else not permissive
    try:
        plugin = generate(_load_schema(schema), descriptor, strict=strict)
        target = plugin.to_directory(output)
    except SchemaValidationError as exc:
        fail(f"{descriptor} is invalid; nothing generated")
        report_validation_errors(exc.errors, fatal=True)
        raise typer.Exit(code=EXIT_INVALID) from exc
    except TaskforgeError as exc:
        fail(str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc

    if plugin.validation_errors:
        warn(f"Generated {plugin.identifier} despite {len(plugin.validation_errors)} validation error(s)")
        report_validation_errors(plugin.validation_errors, fatal=False)
    ok(f"Exported {plugin.identifier} to {target}")


@app.command("integrate")
def integrate_command(
    descriptor: Path = typer.Argument(..., exists=True, dir_okay=False, help="Descriptor JSON file."),
    schema: Path | None = typer.Option(None, "--schema", "-s", exists=True, dir_okay=False, help="Schema JSON file."),
    multi_version: bool = typer.Option(False, "--multi-version", help="Register behind a version switcher."),
    create_version_record: bool = typer.Option(
        False,
        "--create-version-record",
        help="Record the tool version for this host (worker context only).",
    ),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Project root holding the configuration."),
) -> None:
    """Load the plugin of DESCRIPTOR into a fresh registry and publish its help page."""

    settings = _settings(root)
    registry = PluginRegistry(settings.namespace)
    integrator = PluginIntegrator(registry, DEFAULT_STORE, settings)
    try:
        plugin = generate(_load_schema(schema), descriptor, strict=settings.strict_validation)
        task = integrator.integrate(
            plugin,
            create_version_record=create_version_record,
            multi_version=multi_version,
        )
    except TaskforgeError as exc:
        fail(str(exc))
        raise typer.Exit(code=EXIT_ERROR) from exc

    section(f"{plugin.identifier} ({settings.execution_context.value})")
    info(f"Task type: {registry.qualified_name(task.__name__)}")
    info(f"Help page: {settings.public_root / (task.help_file_path() or '')}")
    ok(f"Integrated {plugin.identifier}")


__all__ = ["app"]
