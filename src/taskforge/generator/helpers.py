# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Pure helper functions exposed to the generation templates."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from itertools import zip_longest
from typing import Final

from jinja2 import Undefined

from .types import JSONValue
from .utils import thaw_json_value

ArgumentConverter = Callable[[JSONValue], Sequence[object]]

_TRAILING_COMMA: Final[re.Pattern[str]] = re.compile(r",\s*$")


def _is_blank(value: object) -> bool:
    """Return ``True`` for ``None``, ``False`` and whitespace-only strings."""

    if value is None or value is False:
        return True
    return isinstance(value, str) and not value.strip()


@dataclass(frozen=True, slots=True)
class CallFormatter:
    """Format calls to ``func`` with arguments padded into aligned columns."""

    func: str
    widths: tuple[int, ...]
    convert: ArgumentConverter | None = None

    def __call__(self, args: JSONValue | Sequence[object]) -> str:
        """Return the source text of a call to ``func`` with ``args``.

        Args:
            args: Argument list, or the raw value handed to ``convert``.

        Returns:
            str: Call expression such as ``f(a,  b)``.
        """

        values = self.convert(args) if self.convert is not None else args
        kept = [str(value) for value in values if not _is_blank(value)]
        cells = [f"{value + ',':<{self._width(index)}}" for index, value in enumerate(kept)]
        inner = _TRAILING_COMMA.sub("", " ".join(cells))
        return f"{self.func}({inner})"

    def _width(self, index: int) -> int:
        return self.widths[index] if index < len(self.widths) else 0


def format_call(
    func: str,
    args: Sequence[JSONValue] | Sequence[Sequence[object]],
    convert: ArgumentConverter | None = None,
) -> CallFormatter:
    """Create a call formatter for ``func`` sized over every argument list in ``args``.

    Each column is padded to the width of its longest value plus one so that
    consecutive calls line up in the generated source. When ``convert`` is
    given it turns each element of ``args`` (and each value later passed to
    the formatter) into an argument list::

        >>> rows = [{"a": "1", "b": "2"}, {"a": "22", "b": "4"}]
        >>> call = format_call("f", rows, lambda row: [row["a"], row["b"]])
        >>> call({"a": "1", "b": "2"})
        'f(1,  2)'

    Args:
        func: Name of the called function.
        args: Argument lists (or values converted by ``convert``) used to size columns.
        convert: Optional converter from a value to an argument list.

    Returns:
        CallFormatter: Callable producing aligned call expressions.
    """

    rows = [list(convert(item)) if convert is not None else list(item) for item in args]
    if not rows:
        return CallFormatter(func=func, widths=(), convert=convert)
    columns = list(zip_longest(*rows))[: len(rows[0])]
    widths = tuple(max(len(value) if isinstance(value, str) else 0 for value in column) + 1 for column in columns)
    return CallFormatter(func=func, widths=widths, convert=convert)


def pyrepr(value: JSONValue | Undefined) -> str:
    """Return ``value`` as a Python literal."""

    if isinstance(value, Undefined):
        # raises UndefinedError under StrictUndefined
        return str(value)
    return repr(thaw_json_value(value))


def runtime_expr(expression: str) -> str:
    """Return ``expression`` wrapped as a runtime template expression."""

    return "{{ " + expression + " }}"


def runtime_tag(statement: str) -> str:
    """Return ``statement`` wrapped as a runtime template tag."""

    return "{% " + statement + " %}"


def check_param_args(parameter: JSONValue) -> list[str]:
    """Return the ``check_param`` argument list validating ``parameter``."""

    entry = _as_mapping(parameter)
    choices = entry.get("value-choices")
    return [
        "errors",
        pyrepr(entry["id"]),
        pyrepr(entry["type"]),
        "optional=True" if entry.get("optional") else "",
        "is_list=True" if entry.get("list") else "",
        "integer=True" if entry.get("integer") else "",
        f"choices={pyrepr(choices)}" if choices else "",
        f"minimum={pyrepr(entry['minimum'])}" if "minimum" in entry else "",
        f"maximum={pyrepr(entry['maximum'])}" if "maximum" in entry else "",
    ]


def substitution_args(parameter: JSONValue) -> list[str]:
    """Return the ``add_substitution`` argument list for ``parameter``."""

    entry = _as_mapping(parameter)
    flag = entry.get("command-line-flag")
    return [
        "substitutions",
        pyrepr(entry["value-key"]),
        pyrepr(entry["id"]),
        f"flag={pyrepr(flag)}" if flag else "",
        "flag_only=True" if entry.get("type") == "Flag" else "",
    ]


def output_args(output: JSONValue) -> list[str]:
    """Return the ``add_output`` argument list for ``output``."""

    entry = _as_mapping(output)
    stripped = entry.get("path-template-stripped-extensions")
    return [
        "outputs",
        pyrepr(entry["id"]),
        pyrepr(entry["path-template"]),
        "optional=True" if entry.get("optional") else "",
        f"stripped={pyrepr(stripped)}" if stripped else "",
    ]


def _as_mapping(value: JSONValue) -> Mapping[str, JSONValue]:
    if not isinstance(value, Mapping):
        raise TypeError(f"expected an object, got {type(value).__name__}")
    return value


TEMPLATE_GLOBALS: Final[Mapping[str, Callable[..., object]]] = {
    "check_param_args": check_param_args,
    "format_call": format_call,
    "output_args": output_args,
    "runtime_expr": runtime_expr,
    "runtime_tag": runtime_tag,
    "substitution_args": substitution_args,
}

TEMPLATE_FILTERS: Final[Mapping[str, Callable[..., object]]] = {
    "pyrepr": pyrepr,
}

__all__ = [
    "TEMPLATE_FILTERS",
    "TEMPLATE_GLOBALS",
    "CallFormatter",
    "check_param_args",
    "format_call",
    "output_args",
    "pyrepr",
    "runtime_expr",
    "runtime_tag",
    "substitution_args",
]
