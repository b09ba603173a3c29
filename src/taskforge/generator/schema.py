# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading and structural validation of tool descriptors."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Protocol, cast, runtime_checkable

from jsonschema import Draft4Validator, validators
from jsonschema.exceptions import SchemaError

from .errors import DescriptorLoadError, SchemaLoadError, SchemaValidationError, ValidationError
from .io import DocumentSource, expand_json
from .types import JSONValue
from .utils import freeze_json_value, thaw_json_value


class JsonSchemaError(Protocol):
    """Represent the subset of jsonschema error attributes consumed here."""

    message: str
    validator: str
    validator_value: Any
    instance: Any

    @property
    def absolute_path(self) -> Iterable[str | int]:
        """Return the path from the document root to the failing value."""


@runtime_checkable
class SchemaValidator(Protocol):
    """Protocol describing the minimal interface exposed by jsonschema validators."""

    def iter_errors(self, instance: JSONValue) -> Iterable[JsonSchemaError]:
        """Iterate over validation errors for ``instance``.

        Args:
            instance: JSON payload to validate against the schema.

        Returns:
            Iterable[JsonSchemaError]: Iterator yielding validation errors.
        """


class Schema(Mapping[str, JSONValue]):
    """Immutable structural ruleset that descriptors are validated against.

    A ``Schema`` behaves like a read-only nested mapping so templates can query
    arbitrary schema metadata (enumerations, descriptions) directly.
    """

    def __init__(self, source: DocumentSource) -> None:
        """Load and check the schema document once.

        Args:
            source: Filesystem path, raw JSON text, or mapping holding the schema.

        Raises:
            SchemaLoadError: If the document cannot be parsed or is not a valid schema.
        """

        document = expand_json(source, error_cls=SchemaLoadError, context="schema")
        validator_cls = validators.validator_for(document, default=Draft4Validator)
        try:
            validator_cls.check_schema(document)
        except SchemaError as exc:
            raise SchemaLoadError(f"schema: not a valid JSON schema: {exc.message}") from exc
        self._document = cast(Mapping[str, JSONValue], freeze_json_value(document))
        self._validator = cast(SchemaValidator, validator_cls(document))

    def validate(self, descriptor: DocumentSource) -> list[ValidationError]:
        """Return the structural errors of ``descriptor`` (empty when valid).

        Args:
            descriptor: Path, JSON text, or mapping holding the descriptor.

        Returns:
            list[ValidationError]: Validation errors sorted by location.

        Raises:
            DescriptorLoadError: If ``descriptor`` is malformed.
        """

        document = expand_json(descriptor, error_cls=DescriptorLoadError, context="descriptor")
        errors = [_convert_error(error) for error in self._validator.iter_errors(document)]
        return sorted(errors, key=lambda error: (tuple(str(part) for part in error.path), error.message))

    def validate_strict(self, descriptor: DocumentSource) -> list[ValidationError]:
        """Validate ``descriptor`` and raise when it violates the schema.

        Args:
            descriptor: Path, JSON text, or mapping holding the descriptor.

        Returns:
            list[ValidationError]: Always an empty list.

        Raises:
            DescriptorLoadError: If ``descriptor`` is malformed.
            SchemaValidationError: If any validation error is found.
        """

        errors = self.validate(descriptor)
        if errors:
            raise SchemaValidationError(errors)
        return errors

    def to_dict(self) -> dict[str, JSONValue]:
        """Return a mutable copy of the schema document."""

        return cast(dict[str, JSONValue], thaw_json_value(self._document))

    def __getitem__(self, key: str) -> JSONValue:
        return self._document[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._document)

    def __len__(self) -> int:
        return len(self._document)

    def __repr__(self) -> str:
        title = self._document.get("title") or self._document.get("id") or "untitled"
        return f"Schema({title!r})"


def _convert_error(error: JsonSchemaError) -> ValidationError:
    """Convert a jsonschema error into a :class:`ValidationError`.

    ``required`` failures are reported by jsonschema against the parent
    object; the missing property name is appended so the path points at it.
    """

    path: tuple[str | int, ...] = tuple(error.absolute_path)
    if error.validator == "required" and isinstance(error.instance, Mapping):
        for name in error.validator_value:
            if name not in error.instance and repr(name) in error.message:
                path += (name,)
                break
    return ValidationError(path=path, message=error.message)


__all__ = ["Schema", "SchemaValidator"]
