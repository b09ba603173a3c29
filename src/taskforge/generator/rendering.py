# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render the fixed generation templates for a descriptor."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Final

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from .artifacts import ArtifactKind, ArtifactSet
from .errors import GenerationError
from .helpers import TEMPLATE_FILTERS, TEMPLATE_GLOBALS
from .naming import classify
from .schema import Schema
from .types import Descriptor, JSONValue

TEMPLATE_NAMES: Final[Mapping[ArtifactKind, str]] = {
    ArtifactKind.CLIENT_DEFINITION: "client.py.j2",
    ArtifactKind.WORKER_DEFINITION: "worker.py.j2",
    ArtifactKind.PARAMS_TEMPLATE: "task_params.html.j2",
    ArtifactKind.SHOW_TEMPLATE: "show_params.html.j2",
    ArtifactKind.HELP_TEMPLATE: "edit_help.html.j2",
}


@lru_cache(maxsize=1)
def template_environment() -> Environment:
    """Return the shared Jinja environment loading the packaged templates.

    Returns:
        Environment: Environment with strict undefined handling and the
        generation helpers registered as globals and filters.
    """

    environment = Environment(
        loader=PackageLoader("taskforge.generator", "templates"),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    environment.globals.update(TEMPLATE_GLOBALS)
    environment.filters.update(TEMPLATE_FILTERS)
    return environment


def render(schema: Schema, descriptor: Descriptor, *, identifier: str | None = None) -> ArtifactSet:
    """Render every generation template for ``descriptor``.

    Args:
        schema: Schema the descriptor was validated against; exposed to templates.
        descriptor: Parsed descriptor document.
        identifier: Canonical identifier; derived from ``descriptor["name"]`` when omitted.

    Returns:
        ArtifactSet: Generated sources keyed by artifact kind.

    Raises:
        GenerationError: If any template fails to render.
    """

    if identifier is None:
        name = descriptor.get("name")
        if not isinstance(name, str):
            raise GenerationError("descriptor", "expected 'name' to be a string")
        identifier = classify(name)
    binding: dict[str, object] = {
        "descriptor": descriptor,
        "schema": schema,
        "name": identifier,
        "inputs": _entries(descriptor, "inputs"),
        "outputs": _entries(descriptor, "output-files"),
    }
    environment = template_environment()
    return ArtifactSet(
        {kind: _render_template(environment, template, binding) for kind, template in TEMPLATE_NAMES.items()},
    )


def _render_template(environment: Environment, template: str, binding: Mapping[str, object]) -> str:
    """Render ``template`` with ``binding``, converting failures to :class:`GenerationError`."""

    try:
        return environment.get_template(template).render(binding)
    except TemplateError as exc:
        raise GenerationError(template, exc.message or type(exc).__name__) from exc
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise GenerationError(template, f"{type(exc).__name__}: {exc}") from exc


def _entries(descriptor: Descriptor, key: str) -> JSONValue:
    """Return the list stored under ``key``, or an empty list when absent."""

    value = descriptor.get(key)
    return [] if value is None else value


__all__ = ["TEMPLATE_NAMES", "render", "template_environment"]
