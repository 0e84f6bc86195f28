# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for local and global binary resolution."""

from __future__ import annotations

from pathlib import Path
from threading import Event, Thread

from helpers.fakes import RecordingNotifier, make_executable

from pyformatters.binaries import BinaryLocator, BinaryResolution, ResolutionScope
from pyformatters.filesystem import PathResolver


def _locator(resolver: PathResolver, notifier: RecordingNotifier) -> BinaryLocator:
    return BinaryLocator("black", resolver=resolver, notifier=notifier)


def test_earliest_candidate_wins_over_closer_later_candidate(
    repo: Path, resolver: PathResolver, notifier: RecordingNotifier
) -> None:
    first = make_executable(repo / "first")
    make_executable(repo / "src" / "pkg" / "second")
    locator = _locator(resolver, notifier)
    locator.set_local_bins(["first", "second"])

    resolution = locator.resolve(str(repo / "src" / "pkg" / "module.py"))

    assert resolution == BinaryResolution(path=str(first.resolve()), scope=ResolutionScope.LOCAL)


def test_innermost_match_of_a_candidate_wins(repo: Path, resolver: PathResolver, notifier: RecordingNotifier) -> None:
    make_executable(repo / ".venv" / "bin" / "black")
    inner = make_executable(repo / "src" / ".venv" / "bin" / "black")
    locator = _locator(resolver, notifier)
    locator.set_local_bins([".venv/bin/black"])

    assert locator.local_path(str(repo / "src" / "pkg" / "module.py")) == str(inner.resolve())


def test_invalid_candidate_reports_once_and_clears_list(resolver: PathResolver, notifier: RecordingNotifier) -> None:
    locator = _locator(resolver, notifier)

    locator.set_local_bins(["black", "bad|name", "also?bad"])

    assert notifier.errors == [("Invalid local binary path for black", "'bad|name' is not a valid file name.")]
    assert locator.local_bins == ()


def test_empty_entries_are_dropped(resolver: PathResolver, notifier: RecordingNotifier) -> None:
    locator = _locator(resolver, notifier)

    locator.set_local_bins(["", "black", ""])

    assert locator.local_bins == ("black",)
    assert notifier.errors == []


def test_falls_back_to_global_binary(repo: Path, resolver: PathResolver, notifier: RecordingNotifier, tmp_path: Path) -> None:
    global_binary = make_executable(tmp_path / "tools" / "black")
    locator = _locator(resolver, notifier)
    locator.set_local_bins([".venv/bin/black"])
    locator.set_global_bin_path(str(global_binary))

    resolution = locator.resolve(str(repo / "src" / "pkg" / "module.py"))

    assert resolution == BinaryResolution(path=str(global_binary), scope=ResolutionScope.GLOBAL)


def test_global_path_expands_home(monkeypatch, tmp_path: Path, resolver: PathResolver, notifier: RecordingNotifier) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    binary = make_executable(tmp_path / "bin" / "black")
    locator = _locator(resolver, notifier)

    locator.set_global_bin_path("~/bin/black")

    assert locator.global_path() == str(binary)


def test_non_executable_global_path_is_reported(tmp_path: Path, resolver: PathResolver, notifier: RecordingNotifier) -> None:
    plain = tmp_path / "black"
    plain.write_text("", encoding="utf-8")
    locator = _locator(resolver, notifier)

    locator.set_global_bin_path(str(plain))

    assert notifier.errors == [("Invalid global binary path for black", f"'{plain}' not found or not executable.")]
    assert locator.global_path() is None


def test_missing_binary_resolves_to_none(repo: Path, resolver: PathResolver, notifier: RecordingNotifier) -> None:
    locator = _locator(resolver, notifier)
    locator.set_local_bins([".venv/bin/black"])

    assert locator.resolve(str(repo / "src" / "pkg" / "module.py")) is None
    assert notifier.errors == []


def test_repeated_resolution_is_a_cache_hit(repo: Path, resolver: PathResolver, notifier: RecordingNotifier) -> None:
    make_executable(repo / ".venv" / "bin" / "black")
    locator = _locator(resolver, notifier)
    locator.set_local_bins(["missing", ".venv/bin/black"])
    file_path = str(repo / "src" / "pkg" / "module.py")

    first = locator.resolve(file_path)
    walks = resolver.walks
    second = locator.resolve(file_path)

    assert first == second
    assert resolver.walks == walks == 2
    assert locator.cache.info().hits == 1


def test_changing_candidates_invalidates_cache(repo: Path, resolver: PathResolver, notifier: RecordingNotifier) -> None:
    make_executable(repo / "black")
    alternative = make_executable(repo / "black-alt")
    locator = _locator(resolver, notifier)
    locator.set_local_bins(["black"])
    file_path = str(repo / "src" / "pkg" / "module.py")
    locator.resolve(file_path)

    locator.set_local_bins(["black-alt"])

    assert len(locator.cache) == 0
    assert locator.local_path(file_path) == str(alternative.resolve())


class _GatedResolver(PathResolver):
    """Resolver that parks searches for ``gated`` until released."""

    def __init__(self, gated: str) -> None:
        super().__init__()
        self.gated = gated
        self.entered = Event()
        self.release = Event()

    def find_in_repo(self, file_path, file_name):
        if file_name == self.gated:
            self.entered.set()
            self.release.wait(timeout=5)
        return super().find_in_repo(file_path, file_name)


def test_search_in_flight_during_change_is_not_cached(repo: Path, notifier: RecordingNotifier) -> None:
    make_executable(repo / "black-old")
    new = make_executable(repo / "black-new")
    resolver = _GatedResolver("black-old")
    locator = BinaryLocator("black", resolver=resolver, notifier=notifier)
    locator.set_local_bins(["black-old"])
    file_path = str(repo / "src" / "pkg" / "module.py")
    results: list[str | None] = []

    worker = Thread(target=lambda: results.append(locator.local_path(file_path)))
    worker.start()
    assert resolver.entered.wait(timeout=5)
    locator.set_local_bins(["black-new"])
    resolver.release.set()
    worker.join(timeout=5)

    assert results == [str((repo / "black-old").resolve())]
    assert locator.local_path(file_path) == str(new.resolve())
