# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Keyed debouncing of settings updates.

Each key owns at most one pending timer. Scheduling a call for a key that
already has a pending call cancels the earlier one, so a burst of changes
collapses into a single invocation carrying the last arguments once the
delay has elapsed without further changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from functools import partial
from typing import Protocol

from .constants import SETTINGS_DEBOUNCE_SECONDS

LOGGER = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Subset of :class:`threading.Timer` used by :class:`Debouncer`."""

    daemon: bool

    def start(self) -> None:
        """Start counting down."""

    def cancel(self) -> None:
        """Stop the timer if it has not fired yet."""


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class Debouncer:
    """Delay calls per key, keeping only the most recent one."""

    def __init__(
        self,
        delay: float = SETTINGS_DEBOUNCE_SECONDS,
        *,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        if delay < 0:
            raise ValueError("debounce delay must be non-negative")
        self.delay = delay
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timers: dict[str, TimerHandle] = {}
        self._generations: dict[str, int] = {}

    def call(self, key: str, func: Callable[..., None], *args: object) -> None:
        """Schedule ``func(*args)`` for ``key`` after the debounce delay.

        Args:
            key: Identifier grouping calls that replace one another.
            func: Callable run once the delay elapses.
            *args: Positional arguments forwarded to ``func``.
        """

        with self._lock:
            previous = self._timers.pop(key, None)
            generation = self._generations.get(key, 0) + 1
            self._generations[key] = generation
            timer = self._timer_factory(self.delay, partial(self._fire, key, generation, func, args))
            timer.daemon = True
            self._timers[key] = timer
        if previous is not None:
            previous.cancel()
            LOGGER.debug("debounced pending update for %s", key)
        timer.start()

    def _fire(self, key: str, generation: int, func: Callable[..., None], args: tuple[object, ...]) -> None:
        with self._lock:
            if self._generations.get(key) != generation or key not in self._timers:
                return
            del self._timers[key]
        func(*args)

    def pending(self) -> tuple[str, ...]:
        """Return the keys with a scheduled call."""

        with self._lock:
            return tuple(self._timers)

    def cancel_all(self) -> None:
        """Drop every scheduled call without running it."""

        with self._lock:
            timers, self._timers = self._timers, {}
        for timer in timers.values():
            timer.cancel()


__all__ = ["Debouncer", "TimerFactory", "TimerHandle"]
