# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console reporting for the taskforge command line."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from functools import lru_cache
from typing import Final, Literal

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from .generator.errors import ValidationError

Level = Literal["info", "ok", "warn", "fail"]

# Marker and colour printed for each level.
_LEVELS: Final[dict[Level, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_console(*, color: bool, tty: bool) -> Console:
    """Return a cached Rich console for the colour and terminal flags."""

    return Console(
        color_system="auto" if color and tty else None,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=False,
        soft_wrap=True,
    )


def _resolve_color(use_color: bool | None) -> tuple[bool, bool]:
    tty = detect_tty()
    return (tty if use_color is None else use_color), tty


def emit(level: Level, msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    """Print ``msg`` with the marker and colour of ``level``.

    Args:
        level: One of ``info``, ``ok``, ``warn`` or ``fail``.
        msg: Message text, printed verbatim (no Rich markup).
        use_emoji: Whether to prefix the level marker.
        use_color: Explicit colour switch; defaults to colour on terminals only.
    """

    marker, style = _LEVELS[level]
    color, tty = _resolve_color(use_color)
    text = Text(f"{marker if use_emoji else ''}{msg}")
    if color:
        text.stylize(style)
    get_console(color=color, tty=tty).print(text)


def info(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    emit("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    emit("ok", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    emit("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = True, use_color: bool | None = None) -> None:
    emit("fail", msg, use_emoji=use_emoji, use_color=use_color)


def report_validation_errors(
    errors: Iterable[ValidationError],
    *,
    fatal: bool,
    use_color: bool | None = None,
) -> None:
    """Print one indented ``location: message`` line per descriptor error.

    Errors are coloured as failures when ``fatal`` and as warnings otherwise;
    the location is printed in bold.
    """

    _, style = _LEVELS["fail" if fatal else "warn"]
    color, tty = _resolve_color(use_color)
    console = get_console(color=color, tty=tty)
    for error in errors:
        if color:
            line = Text.assemble(("  " + error.location, f"bold {style}"), (f": {error.message}", style))
        else:
            line = Text(f"  {error}")
        console.print(line)


def section(title: str, *, use_color: bool | None = None) -> None:
    """Print a section header, as a rule when colour is enabled."""

    color, tty = _resolve_color(use_color)
    console = get_console(color=color, tty=tty)
    if color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(Text(f"\n--- {title} ---"))


__all__ = [
    "Level",
    "detect_tty",
    "emit",
    "fail",
    "get_console",
    "info",
    "ok",
    "report_validation_errors",
    "section",
    "warn",
]
