# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console reporting helpers."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from taskforge.generator.errors import ValidationError
from taskforge.logging import detect_tty, emit, fail, info, ok, report_validation_errors, section, warn


@pytest.mark.parametrize(
    ("reporter", "marker"),
    [(info, "ℹ️ "), (ok, "✅ "), (warn, "⚠️ "), (fail, "❌ ")],
)
def test_level_markers(
    capsys: pytest.CaptureFixture[str],
    reporter: Callable[..., None],
    marker: str,
) -> None:
    reporter("generated ReconAll", use_color=False)

    assert capsys.readouterr().out == f"{marker}generated ReconAll\n"


def test_emit_without_emoji_prints_markup_verbatim(capsys: pytest.CaptureFixture[str]) -> None:
    emit("warn", "[bold]not markup[/bold]", use_emoji=False, use_color=False)

    assert capsys.readouterr().out == "[bold]not markup[/bold]\n"


def test_validation_errors_are_indented_per_location(capsys: pytest.CaptureFixture[str]) -> None:
    errors = [
        ValidationError(path=("inputs", 0, "type"), message="'Text' is not one of ['String', 'File']"),
        ValidationError(path=(), message="'name' is a required property"),
    ]

    report_validation_errors(errors, fatal=True, use_color=False)

    assert capsys.readouterr().out.splitlines() == [
        "  /inputs/0/type: 'Text' is not one of ['String', 'File']",
        "  /: 'name' is a required property",
    ]


def test_plain_section_header(capsys: pytest.CaptureFixture[str]) -> None:
    section("ReconAll (client)", use_color=False)

    assert capsys.readouterr().out == "\n--- ReconAll (client) ---\n"


def test_colour_follows_terminal_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    assert not detect_tty()

    ok("done")

    assert capsys.readouterr().out == "✅ done\n"
