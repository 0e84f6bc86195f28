# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process spawning interfaces."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProcessHandle(Protocol):
    """Running process that can be waited on for its captured output."""

    returncode: int | None

    def communicate(self, input: str | None = None) -> tuple[str, str]:  # noqa: A002 - mirrors subprocess
        """Send ``input`` to stdin, wait for exit and return ``(stdout, stderr)``."""

        raise NotImplementedError


@runtime_checkable
class Spawner(Protocol):
    """Start a shell command line."""

    def __call__(self, command_line: str, *, use_stdin: bool, cwd: Path | None) -> ProcessHandle:
        """Start ``command_line`` through the shell and return its handle."""

        raise NotImplementedError


__all__ = ["ProcessHandle", "Spawner"]
