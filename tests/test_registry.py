# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the plugin registry and the source loader."""

from __future__ import annotations

import logging

import pytest

from taskforge.generator.errors import LoadError
from taskforge.registry import PluginRegistry, VersionSwitcher, load_module, load_task_type
from taskforge.registry.registry import DEFAULT_REGISTRY, GENERIC_NAMESPACE
from taskforge.tasks import ClientTask, WorkerTask


class First(ClientTask):
    pass


class Second(ClientTask):
    pass


def test_bind_populates_both_namespaces(registry: PluginRegistry) -> None:
    registry.bind("Foo", First)

    assert registry["Foo"] is First
    assert registry.namespace.Foo is First
    assert registry.defined_in("Foo") == [GENERIC_NAMESPACE, "taskforge.generated"]
    assert list(registry) == ["Foo"]
    assert len(registry) == 1
    assert "Foo" in registry


def test_replace_warns_about_collisions(registry: PluginRegistry, caplog: pytest.LogCaptureFixture) -> None:
    registry.replace("Foo", First)
    assert caplog.records == []

    with caplog.at_level(logging.WARNING, logger="taskforge.registry.registry"):
        registry.replace("Foo", Second)

    assert registry["Foo"] is Second
    assert registry.namespace.Foo is Second
    assert len(registry) == 1
    assert "Foo is already defined in generic, taskforge.generated" in caplog.text


def test_replace_without_warning(registry: PluginRegistry, caplog: pytest.LogCaptureFixture) -> None:
    registry.replace("Foo", First)
    with caplog.at_level(logging.WARNING):
        registry.replace("Foo", Second, warn=False)

    assert registry["Foo"] is Second
    assert "already defined" not in caplog.text


def test_collision_in_task_namespace_only(registry: PluginRegistry, caplog: pytest.LogCaptureFixture) -> None:
    registry.namespace.Foo = First

    with caplog.at_level(logging.WARNING):
        registry.replace("Foo", Second)

    assert "already defined in taskforge.generated;" in caplog.text
    assert registry.try_get("Foo") is Second


def test_names_derived_from_namespace() -> None:
    registry = PluginRegistry("plugins.tasks")

    assert registry.module_name("ReconAll") == "plugins.tasks.recon_all"
    assert registry.qualified_name("ReconAll") == "plugins.tasks.ReconAll"
    assert registry.namespace.__name__ == "plugins.tasks"


def test_version_switcher_get_or_create(registry: PluginRegistry) -> None:
    switcher = registry.version_switcher("Foo", ClientTask)

    assert registry.version_switcher("Foo", WorkerTask) is switcher
    assert issubclass(switcher, VersionSwitcher)
    assert issubclass(switcher, ClientTask)
    assert switcher.__name__ == "Foo"
    assert switcher.known_versions == {}
    assert registry.switchers() == {"Foo": switcher}
    assert "Foo" not in registry


def test_switchers_do_not_share_versions(registry: PluginRegistry) -> None:
    registry.version_switcher("Foo", ClientTask).known_versions["1.0"] = First

    assert registry.version_switcher("Bar", ClientTask).known_versions == {}


def test_reset_clears_everything(registry: PluginRegistry) -> None:
    registry.bind("Foo", First)
    registry.version_switcher("Foo", ClientTask)

    registry.reset()

    assert len(registry) == 0
    assert registry.try_get("Foo") is None
    assert not hasattr(registry.namespace, "Foo")
    assert registry.switchers() == {}


def test_default_registry_is_a_registry() -> None:
    assert isinstance(DEFAULT_REGISTRY, PluginRegistry)


def test_load_module_executes_source() -> None:
    module = load_module("VALUE = 6 * 7\n", module_name="tests.loaded.answer")

    assert module.VALUE == 42
    assert module.__name__ == "tests.loaded.answer"


@pytest.mark.parametrize(
    "source",
    [
        "def broken(:\n",
        "raise RuntimeError('boom')\n",
        "Foo = 1\n",
        "class Foo:\n    pass\n",
    ],
)
def test_load_task_type_rejects_unusable_source(source: str) -> None:
    with pytest.raises(LoadError):
        load_task_type(source, identifier="Foo", module_name="tests.loaded.foo", base=ClientTask)


def test_load_task_type_checks_the_base_class() -> None:
    source = "from taskforge.tasks.base import WorkerTask\n\nclass Foo(WorkerTask):\n    pass\n"

    assert issubclass(load_task_type(source, identifier="Foo", module_name="m", base=WorkerTask), WorkerTask)
    with pytest.raises(LoadError):
        load_task_type(source, identifier="Foo", module_name="m", base=ClientTask)
