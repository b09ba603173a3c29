# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process registry, version switchers and plugin integration."""

from __future__ import annotations

from .integrator import DEFAULT_STORE, ExternalRegistration, PluginIntegrator, integrate
from .loader import load_module, load_task_type
from .registry import DEFAULT_REGISTRY, PluginRegistry
from .store import InMemoryToolStore, ToolRecord, ToolStore, ToolVersionRecord
from .switcher import VersionSwitcher, make_version_switcher

__all__ = [
    "DEFAULT_REGISTRY",
    "DEFAULT_STORE",
    "ExternalRegistration",
    "InMemoryToolStore",
    "PluginIntegrator",
    "PluginRegistry",
    "ToolRecord",
    "ToolStore",
    "ToolVersionRecord",
    "VersionSwitcher",
    "integrate",
    "load_module",
    "load_task_type",
    "make_version_switcher",
]
