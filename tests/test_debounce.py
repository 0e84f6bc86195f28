# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for keyed debouncing of settings changes."""

from __future__ import annotations

import threading

import pytest
from helpers.fakes import FakeTimers

from pyformatters.debounce import Debouncer


def test_burst_collapses_into_last_call(timers: FakeTimers) -> None:
    calls: list[int] = []
    debouncer = Debouncer(0.5, timer_factory=timers)

    for value in range(5):
        debouncer.call("order", calls.append, value)

    assert calls == []
    assert debouncer.pending() == ("order",)
    assert timers.fire_all() == 1
    assert calls == [4]
    assert debouncer.pending() == ()


def test_keys_are_independent(timers: FakeTimers) -> None:
    calls: list[str] = []
    debouncer = Debouncer(timer_factory=timers)

    debouncer.call("a", calls.append, "a1")
    debouncer.call("b", calls.append, "b1")
    debouncer.call("a", calls.append, "a2")
    timers.fire_all()

    assert sorted(calls) == ["a2", "b1"]


def test_superseded_timer_that_fires_late_is_ignored(timers: FakeTimers) -> None:
    calls: list[int] = []
    debouncer = Debouncer(timer_factory=timers)
    debouncer.call("k", calls.append, 1)
    stale = timers.timers[0]
    debouncer.call("k", calls.append, 2)

    stale.function()

    assert calls == []
    timers.fire_all()
    assert calls == [2]


def test_cancel_all_drops_pending_calls(timers: FakeTimers) -> None:
    calls: list[int] = []
    debouncer = Debouncer(timer_factory=timers)
    debouncer.call("k", calls.append, 1)

    debouncer.cancel_all()

    assert timers.fire_all() == 0
    assert debouncer.pending() == ()
    assert calls == []


def test_timers_are_daemonic(timers: FakeTimers) -> None:
    Debouncer(timer_factory=timers).call("k", print)

    assert timers.timers[0].daemon is True


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        Debouncer(-1)


def test_real_timer_fires_after_delay() -> None:
    fired = threading.Event()
    received: list[str] = []
    debouncer = Debouncer(0.01)

    def record(value: str) -> None:
        received.append(value)
        fired.set()

    debouncer.call("k", record, "first")
    debouncer.call("k", record, "second")

    assert fired.wait(timeout=2)
    assert received == ["second"]
