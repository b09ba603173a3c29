# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the pure generation template helpers."""

from __future__ import annotations

from types import MappingProxyType

import pytest
from jinja2 import Environment, StrictUndefined, UndefinedError

from taskforge.generator.helpers import (
    TEMPLATE_FILTERS,
    check_param_args,
    format_call,
    output_args,
    pyrepr,
    runtime_expr,
    runtime_tag,
    substitution_args,
)


def test_format_call_aligns_columns() -> None:
    call = format_call("f", [["a", "bb"], ["ccc", "d"]])

    assert call(["a", "bb"]) == "f(a,   bb)"
    assert call(["ccc", "d"]) == "f(ccc, d)"


def test_format_call_drops_blank_arguments() -> None:
    call = format_call("f", [["a", "b"]])

    assert call(["a", "", None, False, "  ", "b"]) == "f(a, b)"
    assert call([]) == "f()"


def test_format_call_with_converter() -> None:
    rows = [{"a": "1", "b": "2"}, {"a": "22", "b": "4"}]
    call = format_call("f", rows, lambda row: [row["a"], row["b"]])

    assert call(rows[0]) == "f(1,  2)"
    assert call(rows[1]) == "f(22, 4)"


def test_format_call_without_rows() -> None:
    assert format_call("g", [])(["x", "y"]) == "g(x, y)"


def test_pyrepr_thaws_frozen_values() -> None:
    assert pyrepr("it's") == '"it\'s"'
    assert pyrepr(MappingProxyType({"a": (1, 2)})) == "{'a': [1, 2]}"
    assert pyrepr(None) == "None"


def test_pyrepr_rejects_strict_undefined() -> None:
    environment = Environment(undefined=StrictUndefined)
    environment.filters.update(TEMPLATE_FILTERS)

    with pytest.raises(UndefinedError):
        environment.from_string("{{ missing | pyrepr }}").render()


def test_runtime_helpers_emit_template_syntax() -> None:
    assert runtime_expr("params.x") == "{{ params.x }}"
    assert runtime_tag("endif") == "{% endif %}"


def test_check_param_args() -> None:
    args = check_param_args(
        {
            "id": "threads",
            "type": "Number",
            "optional": True,
            "integer": True,
            "minimum": 1,
            "value-choices": [1, 2],
        },
    )

    assert args == [
        "errors",
        "'threads'",
        "'Number'",
        "optional=True",
        "",
        "integer=True",
        "choices=[1, 2]",
        "minimum=1",
        "",
    ]


def test_substitution_args_for_flag() -> None:
    args = substitution_args({"id": "debug", "type": "Flag", "value-key": "[DEBUG]", "command-line-flag": "-d"})

    assert args == ["substitutions", "'[DEBUG]'", "'debug'", "flag='-d'", "flag_only=True"]


def test_output_args() -> None:
    args = output_args({"id": "out", "path-template": "[IN].txt", "path-template-stripped-extensions": [".nii"]})

    assert args == ["outputs", "'out'", "'[IN].txt'", "", "stripped=['.nii']"]


def test_converters_reject_non_objects() -> None:
    with pytest.raises(TypeError):
        check_param_args(["not", "an", "object"])
