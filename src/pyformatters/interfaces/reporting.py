# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Notification and progress sink interfaces."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """Surface errors and warnings to the user."""

    def report_error(self, detail: str | None, title: str) -> None:
        """Report ``title`` with optional ``detail`` text."""

        raise NotImplementedError


@runtime_checkable
class ProgressSink(Protocol):
    """Track in-flight work by label."""

    def report_progress(self, label: str) -> None:
        """Mark ``label`` as in progress."""

        raise NotImplementedError

    def clear_progress(self, label: str) -> None:
        """Mark ``label`` as finished."""

        raise NotImplementedError


__all__ = ["Notifier", "ProgressSink"]
