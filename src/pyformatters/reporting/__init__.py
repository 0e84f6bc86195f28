# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporting helpers: notifications, progress tracking and status summaries."""

from __future__ import annotations

from .notifier import ConsoleNotifier, Notification
from .progress import BusyEntry, ProgressTracker
from .status import StatusSnapshot, render_status, status_tooltip

__all__ = [
    "BusyEntry",
    "ConsoleNotifier",
    "Notification",
    "ProgressTracker",
    "StatusSnapshot",
    "render_status",
    "status_tooltip",
]
