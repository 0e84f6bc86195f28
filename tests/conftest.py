# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from helpers.fakes import FakeTimers, InlineExecutor, RecordingNotifier, RecordingProgress, RecordingSpawner

from pyformatters.debounce import Debouncer
from pyformatters.filesystem import PathResolver
from pyformatters.host import HeadlessWorkspace
from pyformatters.orchestrator import Orchestrator
from pyformatters.process import ProcessRunner
from pyformatters.settings import Settings, SettingsStore


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Return a repository root holding ``.git`` and ``src/pkg/module.py``."""

    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    module = root / "src" / "pkg" / "module.py"
    module.parent.mkdir(parents=True)
    module.write_text("x = 1\n", encoding="utf-8")
    return root


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def spawner() -> RecordingSpawner:
    return RecordingSpawner()


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def resolver() -> PathResolver:
    return PathResolver()


@pytest.fixture
def runner(notifier: RecordingNotifier, spawner: RecordingSpawner) -> ProcessRunner:
    return ProcessRunner(notifier=notifier, spawner=spawner, executor=InlineExecutor())


@pytest.fixture
def make_orchestrator(
    repo: Path,
    notifier: RecordingNotifier,
    runner: ProcessRunner,
    timers: FakeTimers,
    resolver: PathResolver,
) -> Iterator[Callable[..., tuple[Orchestrator, SettingsStore, HeadlessWorkspace]]]:
    """Return a factory building an initialised orchestrator over ``repo``."""

    built: list[Orchestrator] = []

    def factory(settings: Settings | None = None) -> tuple[Orchestrator, SettingsStore, HeadlessWorkspace]:
        store = SettingsStore.from_settings(settings)
        workspace = HeadlessWorkspace(repo)
        orchestrator = Orchestrator(
            workspace=workspace,
            settings=store,
            notifier=notifier,
            runner=runner,
            debouncer=Debouncer(timer_factory=timers),
            resolver=resolver,
        )
        orchestrator.initialize()
        built.append(orchestrator)
        return orchestrator, store, workspace

    yield factory
    for orchestrator in built:
        orchestrator.shutdown()
