# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Recording fakes standing in for the editor, processes and timers."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class RecordingNotifier:
    errors: list[tuple[str, str | None]] = field(default_factory=list)

    def report_error(self, detail: str | None, title: str) -> None:
        self.errors.append((title, detail))

    @property
    def titles(self) -> list[str]:
        return [title for title, _ in self.errors]


@dataclass
class RecordingProgress:
    events: list[tuple[str, str]] = field(default_factory=list)

    def report_progress(self, label: str) -> None:
        self.events.append(("report", label))

    def clear_progress(self, label: str) -> None:
        self.events.append(("clear", label))


Responder = Callable[[str, str | None], tuple[str, str]]


def echo(_command_line: str, input_text: str | None) -> tuple[str, str]:
    return input_text or "", ""


@dataclass
class FakeProcess:
    command_line: str
    respond: Responder
    returncode: int | None = 0
    received: list[str | None] = field(default_factory=list)

    def communicate(self, input: str | None = None) -> tuple[str, str]:  # noqa: A002
        self.received.append(input)
        return self.respond(self.command_line, input)


@dataclass(frozen=True)
class SpawnCall:
    command_line: str
    use_stdin: bool
    cwd: Path | None


class RecordingSpawner:
    """Spawner returning :class:`FakeProcess` objects driven by ``respond``."""

    def __init__(self, respond: Responder = echo, *, returncode: int | None = 0) -> None:
        self.respond = respond
        self.returncode = returncode
        self.calls: list[SpawnCall] = []
        self.processes: list[FakeProcess] = []

    def __call__(self, command_line: str, *, use_stdin: bool, cwd: Path | None) -> FakeProcess:
        self.calls.append(SpawnCall(command_line, use_stdin, cwd))
        process = FakeProcess(command_line, self.respond, returncode=self.returncode)
        self.processes.append(process)
        return process

    @property
    def command_lines(self) -> list[str]:
        return [call.command_line for call in self.calls]


class InlineExecutor(Executor):
    """Executor running submitted work synchronously in the caller's thread."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
        future: Future[Any] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001 - surfaced through the future
            future.set_exception(exc)
        return future


class FakeTimer:
    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimers:
    """Timer factory collecting timers so tests decide when they fire."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    def live(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if timer.started and not timer.cancelled]

    def fire_all(self) -> int:
        fired = 0
        for timer in self.live():
            timer.cancelled = True
            timer.function()
            fired += 1
        return fired


def make_executable(path: Path, content: str = "#!/bin/sh\ncat\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    path.chmod(0o755)
    return path
