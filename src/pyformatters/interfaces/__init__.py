# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the collaborators of the formatter pipeline."""

from __future__ import annotations

from .editor import CursorPosition, Document, DocumentCallback, Workspace
from .process import ProcessHandle, Spawner
from .reporting import Notifier, ProgressSink
from .settings import SettingCallback, SettingsSource, SettingValue, Subscription

__all__ = [
    "CursorPosition",
    "Document",
    "DocumentCallback",
    "Notifier",
    "ProcessHandle",
    "ProgressSink",
    "SettingCallback",
    "SettingValue",
    "SettingsSource",
    "Spawner",
    "Subscription",
    "Workspace",
]
