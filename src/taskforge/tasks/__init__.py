# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Task types extended by generated plugins."""

from __future__ import annotations

from .base import AssetProvider, ClientTask, ExecutionContext, TaskBase, WorkerTask

__all__ = ["AssetProvider", "ClientTask", "ExecutionContext", "TaskBase", "WorkerTask"]
