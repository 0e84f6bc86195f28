# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Busy-signal style tracking of in-flight formatter runs."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BusyEntry:
    """In-flight work item identified by ``label``."""

    label: str
    started_at: float


class ProgressTracker:
    """Record labels between ``report_progress`` and ``clear_progress``."""

    def __init__(self, *, enabled: bool = True, clock: Callable[[], float] = time.monotonic) -> None:
        self._enabled = enabled
        self._clock = clock
        self._lock = Lock()
        self._entries: OrderedDict[str, BusyEntry] = OrderedDict()

    @property
    def enabled(self) -> bool:
        """Return ``True`` when progress is being tracked."""

        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Turn tracking on or off; disabling drops current entries."""

        self._enabled = enabled
        if not enabled:
            with self._lock:
                self._entries.clear()

    def report_progress(self, label: str) -> None:
        """Start tracking ``label``."""

        if not self._enabled:
            return
        with self._lock:
            self._entries[label] = BusyEntry(label=label, started_at=self._clock())
        LOGGER.debug("started %s", label)

    def clear_progress(self, label: str) -> None:
        """Stop tracking ``label``; unknown labels are ignored."""

        with self._lock:
            entry = self._entries.pop(label, None)
        if entry is not None:
            LOGGER.debug("finished %s in %.2fs", label, self._clock() - entry.started_at)

    def active(self) -> tuple[BusyEntry, ...]:
        """Return the entries still in flight, oldest first."""

        with self._lock:
            return tuple(self._entries.values())

    def __contains__(self, label: object) -> bool:
        with self._lock:
            return label in self._entries


__all__ = ["BusyEntry", "ProgressTracker"]
