# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles for command output and error reports."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import TextIO

from rich.console import Console


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return ``True`` when ``stream`` (stdout by default) is a terminal."""

    target = sys.stdout if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class _ConsoleKey:
    color: bool
    emoji: bool
    stderr: bool
    tty: bool


class RichConsoleManager:
    """Hand out one Rich :class:`Console` per presentation and stream."""

    def __init__(self) -> None:
        self._consoles: dict[_ConsoleKey, Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        """Return the console for the requested presentation.

        Args:
            color: Enable ANSI colour when the target stream is a terminal.
            emoji: Let Rich render emoji codes.
            stderr: Write to standard error instead of standard output.

        Returns:
            Console: Console bound lazily to the current ``sys.stdout`` or
            ``sys.stderr``.
        """

        tty = detect_tty(sys.stderr if stderr else sys.stdout)
        key = _ConsoleKey(color=color and tty, emoji=emoji, stderr=stderr, tty=tty)
        console = self._consoles.get(key)
        if console is None:
            console = Console(
                color_system="auto" if key.color else None,
                force_terminal=tty,
                no_color=not key.color,
                emoji=emoji,
                highlight=False,
                soft_wrap=True,
                stderr=stderr,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


__all__ = ["RichConsoleManager", "detect_tty", "get_console_manager"]
