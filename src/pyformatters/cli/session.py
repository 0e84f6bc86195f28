# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the headless host and orchestrator used by one CLI invocation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from ..host import HeadlessWorkspace
from ..orchestrator import Orchestrator
from ..reporting import ConsoleNotifier
from ..settings import Settings, SettingsStore, discover_settings_file, load_settings

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CLIOptions:
    """Options shared by every command.

    Attributes:
        settings_path: Explicit settings file, or ``None`` to discover one.
        timeout: Seconds to wait for a formatter chain before giving up.
    """

    settings_path: Path | None = None
    timeout: float = 60.0


@dataclass(slots=True)
class CLISession:
    """Everything a command needs to drive formatters on files."""

    settings: SettingsStore
    workspace: HeadlessWorkspace
    notifier: ConsoleNotifier
    orchestrator: Orchestrator
    settings_path: Path | None


def load_store(settings_path: Path | None, root: Path) -> tuple[SettingsStore, Path | None]:
    """Return a settings store plus the file it was loaded from.

    Raises:
        ConfigError: If the settings file is unreadable or invalid.
    """

    path = settings_path if settings_path is not None else discover_settings_file(root)
    if path is None:
        LOGGER.debug("no settings file found above %s, using defaults", root)
        return SettingsStore.from_settings(Settings()), None
    LOGGER.debug("loading settings from %s", path)
    return SettingsStore.from_settings(load_settings(path)), path


@contextmanager
def open_session(options: CLIOptions, *, root: Path | None = None) -> Iterator[CLISession]:
    """Yield an initialised session and shut the orchestrator down afterwards.

    Raises:
        ConfigError: If the settings file is unreadable or invalid.
    """

    workspace_root = root or Path.cwd()
    store, path = load_store(options.settings_path, workspace_root)
    workspace = HeadlessWorkspace(workspace_root)
    notifier = ConsoleNotifier(store)
    orchestrator = Orchestrator(workspace=workspace, settings=store, notifier=notifier)
    orchestrator.initialize()
    try:
        yield CLISession(
            settings=store,
            workspace=workspace,
            notifier=notifier,
            orchestrator=orchestrator,
            settings_path=path,
        )
    finally:
        orchestrator.shutdown()


__all__ = ["CLIOptions", "CLISession", "load_store", "open_session"]
