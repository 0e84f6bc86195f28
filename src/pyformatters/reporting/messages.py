# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""One-line console messages for command output."""

from __future__ import annotations

from typing import Final, NamedTuple

from rich.text import Text

from ..runtime.console import detect_tty, get_console_manager


class _Style(NamedTuple):
    symbol: str
    style: str
    stderr: bool


_STYLES: Final[dict[str, _Style]] = {
    "info": _Style("ℹ️ ", "cyan", False),
    "ok": _Style("✅ ", "green", False),
    "warn": _Style("⚠️ ", "yellow", True),
    "fail": _Style("❌ ", "red", True),
}


def _emit(kind: str, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    style = _STYLES[kind]
    color = detect_tty() if use_color is None else use_color
    text = Text(f"{style.symbol}{msg}" if use_emoji else msg)
    if color:
        text.stylize(style.style)
    get_console_manager().get(color=color, emoji=use_emoji, stderr=style.stderr).print(text)


def info(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print an informational message on stdout."""

    _emit("info", msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print a success message on stdout."""

    _emit("ok", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print a warning on stderr."""

    _emit("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print an error on stderr."""

    _emit("fail", msg, use_emoji=use_emoji, use_color=use_color)


__all__ = ["fail", "info", "ok", "warn"]
