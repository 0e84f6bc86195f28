# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble formatter command-line arguments."""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import Final

from .binaries import ResolutionScope
from .catalog import FormatterProfile
from .constants import STDIN_MARKER

_ARGUMENT_CACHE_SIZE: Final[int] = 256


def quote(value: str) -> str:
    """Wrap ``value`` in double quotes for the shell command line."""

    return f'"{value}"'


@lru_cache(maxsize=_ARGUMENT_CACHE_SIZE)
def build_arguments(
    profile: FormatterProfile,
    file_path: str,
    config_path: str | None,
    use_buffer: bool,
) -> tuple[str, ...]:
    """Return the argument vector for one formatter invocation.

    Args:
        profile: Formatter profile supplying default arguments and config flag.
        file_path: File being formatted.
        config_path: Resolved configuration file, ``None`` or empty for none.
        use_buffer: ``True`` when the buffer is piped through stdin.

    Returns:
        tuple[str, ...]: Default arguments, optional config flag and path, then
        the stdin marker or the quoted file path.
    """

    args = list(profile.default_args(use_buffer))
    if config_path:
        args.extend((profile.config_flag, quote(config_path)))
    args.append(STDIN_MARKER if use_buffer else quote(file_path))
    return tuple(args)


class ArgumentBuilder:
    """Combine scope-specific extra arguments with the built argument vector."""

    def __init__(self, profile: FormatterProfile) -> None:
        self.profile = profile
        self.local_cmd_args: tuple[str, ...] = ()
        self.global_cmd_args: tuple[str, ...] = ()

    def set_local_cmd_args(self, value: Iterable[str] | None) -> None:
        """Replace the extra arguments used with local binaries."""

        self.local_cmd_args = tuple(value or ())

    def set_global_cmd_args(self, value: Iterable[str] | None) -> None:
        """Replace the extra arguments used with the global binary."""

        self.global_cmd_args = tuple(value or ())

    def build(self, file_path: str, config_path: str | None, use_buffer: bool) -> tuple[str, ...]:
        """Return the scope-independent arguments for ``file_path``."""

        return build_arguments(self.profile, file_path, config_path or None, use_buffer)

    def for_scope(
        self,
        scope: ResolutionScope,
        file_path: str,
        config_path: str | None,
        use_buffer: bool,
    ) -> list[str]:
        """Return the arguments of ``scope``: extras first, then :meth:`build`."""

        extras = self.local_cmd_args if scope is ResolutionScope.LOCAL else self.global_cmd_args
        return [*extras, *self.build(file_path, config_path, use_buffer)]


__all__ = ["ArgumentBuilder", "build_arguments", "quote"]
