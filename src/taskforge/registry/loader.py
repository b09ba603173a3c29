# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Turn generated definition source into live task types."""

from __future__ import annotations

import importlib.util
import logging
from types import ModuleType

from ..generator.errors import LoadError
from ..tasks.base import TaskBase

LOGGER = logging.getLogger(__name__)


def load_module(source: str, *, module_name: str) -> ModuleType:
    """Execute ``source`` as the body of a new module named ``module_name``.

    The module is not added to :data:`sys.modules`.

    Args:
        source: Python source of a generated definition.
        module_name: Fully-qualified name given to the module.

    Returns:
        ModuleType: Module populated by executing ``source``.

    Raises:
        LoadError: If the source does not compile or raises while executing.
    """

    filename = f"<generated {module_name}>"
    try:
        code = compile(source, filename, "exec")
    except (SyntaxError, ValueError) as exc:
        raise LoadError(f"{module_name}: generated source does not compile: {exc}") from exc
    spec = importlib.util.spec_from_loader(module_name, loader=None)
    if spec is None:  # pragma: no cover - spec_from_loader only fails for bad names
        raise LoadError(f"{module_name}: unable to create module spec")
    module = importlib.util.module_from_spec(spec)
    try:
        exec(code, module.__dict__)  # noqa: S102 - executes generated definitions
    except Exception as exc:  # noqa: BLE001 - module bodies may raise anything
        raise LoadError(f"{module_name}: generated source failed to execute: {exc}") from exc
    return module


def load_task_type(
    source: str,
    *,
    identifier: str,
    module_name: str,
    base: type[TaskBase],
) -> type[TaskBase]:
    """Load ``source`` and return the task type named ``identifier`` it defines.

    Args:
        source: Python source of a generated definition.
        identifier: Name of the class the source must define.
        module_name: Fully-qualified name given to the module.
        base: Task base class the loaded type must extend.

    Returns:
        type[TaskBase]: Loaded task type.

    Raises:
        LoadError: If the source cannot be loaded or defines no suitable type.
    """

    module = load_module(source, module_name=module_name)
    task = getattr(module, identifier, None)
    if not isinstance(task, type) or not issubclass(task, base):
        raise LoadError(f"{module_name}: source does not define a {base.__name__} named {identifier!r}")
    LOGGER.debug("Loaded %s from %s", identifier, module_name)
    return task


__all__ = ["load_module", "load_task_type"]
