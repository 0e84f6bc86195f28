# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console notifier honouring the ``errorHandling`` setting."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..constants import PACKAGE_NAME
from ..interfaces.settings import SettingsSource
from ..runtime.console import detect_tty, get_console_manager
from ..settings import ERROR_HANDLING_KEY, ErrorHandling

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Notification:
    """One reported error.

    Attributes:
        title: Short summary naming the failing component.
        detail: Optional longer explanation, such as captured stderr.
        mode: Error handling mode in effect when the error was reported.
    """

    title: str
    detail: str | None
    mode: ErrorHandling


class ConsoleNotifier:
    """Report errors on a Rich console.

    ``hide`` only logs, ``transient`` prints a single line and ``show`` prints
    a panel carrying the full detail. The mode is read from the settings on
    every report so toggling it takes effect immediately.
    """

    def __init__(self, settings: SettingsSource | None = None, *, console: Console | None = None) -> None:
        self._settings = settings
        self._console = console
        self.history: list[Notification] = []

    def _mode(self) -> ErrorHandling:
        if self._settings is None:
            return ErrorHandling.TRANSIENT
        raw = self._settings.get(ERROR_HANDLING_KEY)
        try:
            return ErrorHandling(raw)
        except ValueError:
            return ErrorHandling.TRANSIENT

    def _target(self) -> Console:
        if self._console is not None:
            return self._console
        return get_console_manager().get(color=detect_tty(), emoji=False, stderr=True)

    def report_error(self, detail: str | None, title: str) -> None:
        """Record and display ``title`` with optional ``detail``."""

        mode = self._mode()
        self.history.append(Notification(title=title, detail=detail, mode=mode))
        if mode is ErrorHandling.HIDE:
            LOGGER.debug("%s: %s", title, detail)
            return
        LOGGER.warning("%s: %s", title, detail)
        heading = f"{PACKAGE_NAME}: {title}"
        console = self._target()
        if mode is ErrorHandling.SHOW:
            body = Text(detail.rstrip()) if detail else Text("")
            console.print(Panel(body, title=heading, title_align="left", border_style="red"))
            return
        summary = detail.strip().splitlines()[0] if detail and detail.strip() else ""
        line = Text(heading, style="red")
        if summary:
            line.append(f" ({summary})")
        console.print(line)


__all__ = ["ConsoleNotifier", "Notification"]
