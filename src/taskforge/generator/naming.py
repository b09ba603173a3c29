# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Derive canonical type identifiers from free-form tool names."""

from __future__ import annotations

import re
from typing import Final

_NON_WORD: Final[re.Pattern[str]] = re.compile(r"\W", re.ASCII)
_LEADING_DIGIT: Final[re.Pattern[str]] = re.compile(r"^\d")
_ACRONYM_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_WORD_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"([a-z\d])([A-Z])")


def classify(raw_name: str) -> str:
    """Return a class-name-safe identifier derived from ``raw_name``.

    The steps run in a fixed order: dashes become underscores, non-word
    characters are stripped, one leading digit is removed and the remaining
    underscore-delimited segments are joined in PascalCase::

        >>> classify("my-tool_name 2d")
        'MyToolName2d'

    The derivation is total. An empty name yields ``""`` and a name whose
    cleaned form still starts with a digit (``"12tool"`` gives ``"2tool"``)
    yields an identifier that is not a valid class name; callers that need a
    usable identifier must supply a name containing a letter up front.

    Args:
        raw_name: Free-form tool name, usually ``descriptor["name"]``.

    Returns:
        str: Canonical identifier.
    """

    cleaned = raw_name.replace("-", "_")
    cleaned = _NON_WORD.sub("", cleaned)
    cleaned = _LEADING_DIGIT.sub("", cleaned, count=1)
    return "".join(segment[:1].upper() + segment[1:] for segment in cleaned.split("_"))


def underscore(identifier: str) -> str:
    """Return the snake_case form of ``identifier``.

    ``classify(underscore(name)) == name`` for identifiers produced by
    :func:`classify` that contain no run of consecutive capitals.

    Args:
        identifier: PascalCase identifier.

    Returns:
        str: Lower-case identifier with ``_`` word separators.
    """

    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", identifier)
    word = _WORD_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


__all__ = ["classify", "underscore"]
