# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Base classes extended by generated task definitions."""

from __future__ import annotations

import shlex
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from ..generator.artifacts import PARTIAL_KINDS

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from ..generator.model_plugin import GeneratedPlugin
    from ..registry.store import ToolVersionRecord


class ExecutionContext(str, Enum):
    """Enumerate the contexts a task type can be loaded in."""

    CLIENT = "client"
    WORKER = "worker"


@runtime_checkable
class AssetProvider(Protocol):
    """Capability exposing the UI assets of a task type to views."""

    def public_path(self, public_file: str) -> Path | None:
        """Return the public path of ``public_file`` shipped with the task."""

    def generated_from(self) -> GeneratedPlugin | None:
        """Return the plugin the task type was generated from."""

    def raw_partial(self, partial: str) -> str | None:
        """Return the raw UI template named ``partial``."""

    def help_file_path(self) -> str | None:
        """Return the public-root relative path of the task help file."""


class TaskBase:
    """Common state and asset accessors shared by every task type."""

    context: ClassVar[ExecutionContext]
    tool_name: ClassVar[str] = ""
    tool_version: ClassVar[str] = ""

    _generated: ClassVar[GeneratedPlugin | None] = None
    _help_file: ClassVar[str | None] = None

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        tool_config: ToolVersionRecord | None = None,
    ) -> None:
        """Create a task with launch ``params`` and an optional ``tool_config``."""

        self.params: dict[str, Any] = dict(params or {})
        self.tool_config = tool_config

    @classmethod
    def attach_assets(cls, plugin: GeneratedPlugin, *, help_file: str) -> None:
        """Bind the generated ``plugin`` and its published ``help_file`` to the task type."""

        cls._generated = plugin
        cls._help_file = help_file

    @classmethod
    def public_path(cls, public_file: str) -> Path | None:
        """Generated tasks ship no public directory."""

        return None

    @classmethod
    def generated_from(cls) -> GeneratedPlugin | None:
        return cls._generated

    @classmethod
    def raw_partial(cls, partial: str) -> str | None:
        """Return the raw ``task_params``, ``show_params`` or ``edit_help`` template."""

        if cls._generated is None or partial not in PARTIAL_KINDS:
            return None
        return cls._generated.artifacts[PARTIAL_KINDS[partial]]

    @classmethod
    def help_file_path(cls) -> str | None:
        return cls._help_file

    def __repr__(self) -> str:
        return f"<{type(self).__name__} params={self.params!r}>"


class ClientTask(TaskBase):
    """Task type used where tasks are configured and submitted."""

    context: ClassVar[ExecutionContext] = ExecutionContext.CLIENT

    def default_launch_args(self) -> dict[str, Any]:
        """Return default parameter values."""

        return {}

    def pretty_params_names(self) -> dict[str, str]:
        """Return human-readable labels keyed by parameter id."""

        return {}

    def after_form(self) -> dict[str, str]:
        """Validate submitted parameters, returning messages keyed by parameter id."""

        return {}

    def apply_defaults(self) -> dict[str, Any]:
        """Fill unset parameters from :meth:`default_launch_args` and return ``params``."""

        for key, value in self.default_launch_args().items():
            self.params.setdefault(key, value)
        return self.params

    def check_param(
        self,
        errors: MutableMapping[str, str],
        param_id: str,
        kind: str,
        *,
        optional: bool = False,
        is_list: bool = False,
        integer: bool = False,
        choices: Sequence[Any] | None = None,
        minimum: float | None = None,
        maximum: float | None = None,
    ) -> None:
        """Record in ``errors`` why parameter ``param_id`` is unacceptable, if it is.

        Args:
            errors: Messages keyed by parameter id, updated in place.
            param_id: Parameter to check.
            kind: Descriptor input type (``String``, ``File``, ``Flag`` or ``Number``).
            optional: Whether the parameter may be left empty.
            is_list: Whether the parameter accepts several values.
            integer: Whether numeric values must be integral.
            choices: Allowed values, when restricted.
            minimum: Inclusive numeric lower bound.
            maximum: Inclusive numeric upper bound.
        """

        value = self.params.get(param_id)
        label = self.pretty_params_names().get(param_id, param_id)
        if value is None or value == "" or value == []:
            if not optional and kind != "Flag":
                errors[param_id] = f"{label} is required"
            return
        if isinstance(value, list) and not is_list:
            errors[param_id] = f"{label} does not accept multiple values"
            return
        for item in value if isinstance(value, list) else [value]:
            problem = _check_value(item, kind, integer=integer, choices=choices, minimum=minimum, maximum=maximum)
            if problem is not None:
                errors[param_id] = f"{label} {problem}"
                return


def _check_value(
    value: Any,
    kind: str,
    *,
    integer: bool,
    choices: Sequence[Any] | None,
    minimum: float | None,
    maximum: float | None,
) -> str | None:
    """Return the reason ``value`` is unacceptable for ``kind``, or ``None``."""

    if choices is not None and value not in choices:
        return "must be one of " + ", ".join(str(choice) for choice in choices)
    if kind == "Flag":
        if isinstance(value, bool) or value in ("0", "1", "true", "false"):
            return None
        return "must be true or false"
    if kind == "Number":
        if isinstance(value, bool):
            return "must be a number"
        try:
            number = float(value)
        except (TypeError, ValueError):
            return "must be a number"
        if integer and not number.is_integer():
            return "must be an integer"
        if minimum is not None and number < minimum:
            return f"must be at least {minimum:g}"
        if maximum is not None and number > maximum:
            return f"must be at most {maximum:g}"
        return None
    if not isinstance(value, str):
        return "must be a string"
    return None


@dataclass(frozen=True, slots=True)
class Substitution:
    """Command-line text and plain value substituted for one value-key."""

    text: str
    value: str


@dataclass(frozen=True, slots=True)
class OutputFile:
    """Output file expected after the tool runs."""

    path_template: str
    optional: bool = False
    stripped: tuple[str, ...] = ()


class WorkerTask(TaskBase):
    """Task type used where tasks are executed."""

    context: ClassVar[ExecutionContext] = ExecutionContext.WORKER
    command_line: ClassVar[str] = ""
    docker_image: ClassVar[str | None] = None

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        tool_config: ToolVersionRecord | None = None,
        work_dir: Path | str | None = None,
    ) -> None:
        """Create a task running in ``work_dir`` (the current directory by default)."""

        super().__init__(params, tool_config)
        self.work_dir = Path(work_dir) if work_dir is not None else Path.cwd()
        self.missing_outputs: tuple[str, ...] = ()

    def setup(self) -> list[str]:
        """Return the ids of required input files missing from ``work_dir``."""

        return []

    def command_substitutions(self) -> dict[str, Substitution]:
        """Return the substitution of every command-line value-key."""

        return {}

    def output_templates(self) -> dict[str, OutputFile]:
        """Return expected output files keyed by output id."""

        return {}

    def cluster_commands(self) -> list[str]:
        """Return the shell commands running the tool."""

        return [self.apply_substitutions(self.command_line, self.command_substitutions())]

    def output_paths(self) -> dict[str, Path]:
        """Return the resolved location of every expected output file."""

        substitutions = self.command_substitutions()
        paths: dict[str, Path] = {}
        for output_id, output in self.output_templates().items():
            path = output.path_template
            for key, substitution in substitutions.items():
                value = substitution.value
                for extension in output.stripped:
                    if value.endswith(extension):
                        value = value[: -len(extension)]
                path = path.replace(key, value)
            paths[output_id] = self.work_dir / path
        return paths

    def save_results(self) -> bool:
        """Check that required outputs exist, recording the missing ones.

        Returns:
            bool: ``True`` when every required output file was produced.
        """

        templates = self.output_templates()
        self.missing_outputs = tuple(
            output_id
            for output_id, path in self.output_paths().items()
            if not path.exists() and not templates[output_id].optional
        )
        return not self.missing_outputs

    def check_input_file(self, missing: list[str], param_id: str, *, optional: bool = False) -> None:
        """Append ``param_id`` to ``missing`` when its file is absent from ``work_dir``."""

        value = self.params.get(param_id)
        if value in (None, "", []):
            if not optional:
                missing.append(param_id)
            return
        for item in value if isinstance(value, list) else [value]:
            if not (self.work_dir / str(item)).exists():
                missing.append(param_id)
                return

    def add_substitution(
        self,
        substitutions: MutableMapping[str, Substitution],
        value_key: str,
        param_id: str,
        *,
        flag: str | None = None,
        flag_only: bool = False,
    ) -> None:
        """Record the substitution of ``value_key`` by the value of ``param_id``.

        Args:
            substitutions: Substitutions keyed by value-key, updated in place.
            value_key: Placeholder appearing in the command line.
            param_id: Parameter providing the value.
            flag: Command-line flag preceding the value.
            flag_only: Whether the parameter is a boolean flag without value.
        """

        value = self.params.get(param_id)
        if flag_only:
            enabled = value not in (None, False, "", "0", "false")
            text = (flag or "") if enabled else ""
            substitutions[value_key] = Substitution(text=text, value="")
            return
        if value in (None, "", []):
            substitutions[value_key] = Substitution(text="", value="")
            return
        items = [str(item) for item in (value if isinstance(value, list) else [value])]
        quoted = " ".join(shlex.quote(item) for item in items)
        text = f"{flag} {quoted}" if flag else quoted
        substitutions[value_key] = Substitution(text=text, value=" ".join(items))

    def add_output(
        self,
        outputs: MutableMapping[str, OutputFile],
        output_id: str,
        path_template: str,
        *,
        optional: bool = False,
        stripped: Sequence[str] = (),
    ) -> None:
        """Record the expected output ``output_id``."""

        outputs[output_id] = OutputFile(path_template=path_template, optional=optional, stripped=tuple(stripped))

    @staticmethod
    def apply_substitutions(template: str, substitutions: Mapping[str, Substitution]) -> str:
        """Return ``template`` with every value-key replaced by its command-line text."""

        command = template
        for key in sorted(substitutions, key=len, reverse=True):
            command = command.replace(key, substitutions[key].text)
        return command.strip()


__all__ = [
    "AssetProvider",
    "ClientTask",
    "ExecutionContext",
    "OutputFile",
    "Substitution",
    "TaskBase",
    "WorkerTask",
]
