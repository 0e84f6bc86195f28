# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for single formatter units."""

from __future__ import annotations

from pathlib import Path

from helpers.fakes import FakeTimers, RecordingNotifier, RecordingSpawner, make_executable

from pyformatters.catalog import BLACK
from pyformatters.debounce import Debouncer
from pyformatters.filesystem import PathResolver
from pyformatters.formatter import FormatterState, FormatterUnit
from pyformatters.host import FileDocument
from pyformatters.process import ProcessRunner
from pyformatters.settings import (
    GLOBAL_BIN_PATH,
    LOCAL_BINS,
    LOCAL_CMD_ARGS,
    Settings,
    SettingsStore,
    formatter_key,
)


def _unit(
    store: SettingsStore,
    notifier: RecordingNotifier,
    runner: ProcessRunner,
    timers: FakeTimers,
    resolver: PathResolver,
) -> FormatterUnit:
    return FormatterUnit(
        BLACK,
        settings=store,
        notifier=notifier,
        runner=runner,
        debouncer=Debouncer(timer_factory=timers),
        resolver=resolver,
    )


def test_initial_settings_apply_immediately(
    notifier: RecordingNotifier, runner: ProcessRunner, timers: FakeTimers, resolver: PathResolver
) -> None:
    settings = Settings.model_validate({"formatters": {"black": {"local": {"bins": ["bin/black"], "cmdArgs": ["-l", "99"]}}}})

    unit = _unit(SettingsStore.from_settings(settings), notifier, runner, timers, resolver)

    assert unit.binaries.local_bins == ("bin/black",)
    assert unit.arguments.local_cmd_args == ("-l", "99")
    assert unit.configs.local_configs == BLACK.local_configs
    assert timers.timers == []


def test_formats_with_local_binary_and_config(
    repo: Path,
    notifier: RecordingNotifier,
    runner: ProcessRunner,
    spawner: RecordingSpawner,
    timers: FakeTimers,
    resolver: PathResolver,
) -> None:
    binary = make_executable(repo / ".venv" / "bin" / "black")
    pyproject = repo / "pyproject.toml"
    pyproject.write_text("", encoding="utf-8")
    unit = _unit(SettingsStore.from_settings(), notifier, runner, timers, resolver)
    document = FileDocument(repo / "src" / "pkg" / "module.py")
    steps: list[str] = []

    unit.format(document, True, lambda: steps.append("next"))

    assert spawner.command_lines == [f'{binary.resolve()} -q --config "{pyproject.resolve()}" -']
    assert steps == ["next"]
    assert unit.state is FormatterState.IDLE
    assert notifier.errors == []


def test_missing_binary_reports_and_continues(
    repo: Path,
    notifier: RecordingNotifier,
    runner: ProcessRunner,
    spawner: RecordingSpawner,
    timers: FakeTimers,
    resolver: PathResolver,
) -> None:
    unit = _unit(SettingsStore.from_settings(), notifier, runner, timers, resolver)
    steps: list[str] = []

    unit.format(FileDocument(repo / "src" / "pkg" / "module.py"), True, lambda: steps.append("next"))

    assert notifier.errors == [("Could not find binary for black", None)]
    assert spawner.calls == []
    assert steps == ["next"]
    assert unit.state is FormatterState.IDLE


def test_unsaved_document_is_skipped(
    notifier: RecordingNotifier,
    runner: ProcessRunner,
    spawner: RecordingSpawner,
    timers: FakeTimers,
    resolver: PathResolver,
) -> None:
    unit = _unit(SettingsStore.from_settings(), notifier, runner, timers, resolver)
    steps: list[str] = []

    unit.format(FileDocument(None, text="x=1\n"), True, lambda: steps.append("next"))

    assert notifier.titles == ["Save the file before running black"]
    assert spawner.calls == []
    assert steps == ["next"]


def test_global_binary_uses_global_arguments(
    repo: Path,
    tmp_path: Path,
    notifier: RecordingNotifier,
    runner: ProcessRunner,
    spawner: RecordingSpawner,
    timers: FakeTimers,
    resolver: PathResolver,
) -> None:
    global_binary = make_executable(tmp_path / "tools" / "black")
    settings = Settings.model_validate(
        {
            "formatters": {
                "black": {
                    "local": {"cmdArgs": ["--local-only"]},
                    "global": {"binPath": str(global_binary), "cmdArgs": ["--fast"]},
                },
            },
        },
    )
    unit = _unit(SettingsStore.from_settings(settings), notifier, runner, timers, resolver)
    file_path = repo / "src" / "pkg" / "module.py"

    unit.format(FileDocument(file_path), False)

    assert spawner.command_lines == [f'{global_binary} --fast -q "{file_path.resolve()}"']


def test_later_resolution_changes_are_debounced(
    notifier: RecordingNotifier, runner: ProcessRunner, timers: FakeTimers, resolver: PathResolver
) -> None:
    store = SettingsStore.from_settings()
    unit = _unit(store, notifier, runner, timers, resolver)

    store.set(formatter_key("black", LOCAL_BINS), ["bin/one"])
    store.set(formatter_key("black", LOCAL_BINS), ["bin/two"])
    store.set(formatter_key("black", LOCAL_CMD_ARGS), ["--fast"])

    assert unit.binaries.local_bins == BLACK.local_bins
    assert unit.arguments.local_cmd_args == ("--fast",)

    assert timers.fire_all() == 1
    assert unit.binaries.local_bins == ("bin/two",)


def test_dispose_stops_observing(
    tmp_path: Path, notifier: RecordingNotifier, runner: ProcessRunner, timers: FakeTimers, resolver: PathResolver
) -> None:
    store = SettingsStore.from_settings()
    unit = _unit(store, notifier, runner, timers, resolver)

    unit.dispose()
    store.set(formatter_key("black", GLOBAL_BIN_PATH), str(tmp_path / "black"))

    assert timers.timers == []
    assert unit.binaries.bin_path == ""
