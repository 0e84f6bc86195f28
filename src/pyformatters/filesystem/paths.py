# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem probes used to locate formatter binaries and configuration files."""

from __future__ import annotations

import os
import re
from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Final

from ..constants import REPOSITORY_MARKER

_Pathish = str | PathLike[str] | Path
_DEFAULT_CACHE_SIZE: Final[int] = 1024
_HOME_PREFIX: Final[str] = "~"
_INVALID_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r'[<>:"|?*\x00-\x1f]')


@lru_cache(maxsize=_DEFAULT_CACHE_SIZE)
def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.

    """

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def expand_home(value: str) -> str:
    """Return ``value`` stripped and with a leading ``~`` expanded.

    Args:
        value: Raw path string taken from user settings.

    Returns:
        str: Expanded path, or an empty string for blank input.

    """

    stripped = value.strip()
    if not stripped:
        return ""
    if stripped.startswith(_HOME_PREFIX):
        return os.path.expanduser(stripped)
    return stripped


def is_path_entry(value: str) -> bool:
    """Return ``True`` when ``value`` is an absolute or home-relative path."""

    return value.startswith(("/", _HOME_PREFIX))


def is_valid_file_name(name: str) -> bool:
    """Return ``True`` when ``name`` can be used as a file name candidate.

    Args:
        name: Candidate file name, optionally containing directory separators.

    Returns:
        bool: ``False`` for blank names or names carrying reserved characters.

    """

    if not name or not name.strip():
        return False
    return _INVALID_NAME_PATTERN.search(name) is None


def _has_access(path: _Pathish, mode: int) -> bool:
    try:
        return os.access(path, mode)
    except (OSError, ValueError):
        return False


def path_exists(path: _Pathish) -> bool:
    """Return ``True`` when ``path`` exists."""

    return _has_access(path, os.F_OK)


def is_readable(path: _Pathish) -> bool:
    """Return ``True`` when ``path`` exists and is readable."""

    return _has_access(path, os.R_OK)


def is_executable(path: _Pathish) -> bool:
    """Return ``True`` when ``path`` is an executable regular file."""

    return os.path.isfile(path) and _has_access(path, os.X_OK)


class PathResolver:
    """Locate files by walking upward from a directory to the repository root.

    The walk checks the starting directory first and every ancestor after it.
    A directory holding a ``.git`` entry but not the target ends the search,
    so lookups never leave the enclosing repository. ``walks`` counts the
    number of searches performed, which lets callers observe cache hits.
    """

    def __init__(self, *, marker: str = REPOSITORY_MARKER) -> None:
        self._marker = marker
        self.walks = 0

    def find_upward(self, start_dir: _Pathish, file_name: str) -> Path | None:
        """Return the innermost readable ``file_name`` at or above ``start_dir``.

        Args:
            start_dir: Directory where the search begins.
            file_name: Name (or relative path) of the file to look for.

        Returns:
            Path | None: Matching path, or ``None`` when the repository boundary
            or filesystem root is reached without a match.

        """

        self.walks += 1
        current = _best_effort_resolve(Path(start_dir))
        while True:
            candidate = current / file_name
            if is_readable(candidate):
                return candidate
            if path_exists(current / self._marker):
                return None
            parent = current.parent
            if parent == current:
                return None
            current = parent

    def find_in_repo(self, file_path: _Pathish, file_name: str) -> Path | None:
        """Return ``file_name`` searched from the directory containing ``file_path``."""

        return self.find_upward(Path(file_path).parent, file_name)


def display_relative_path(path: _Pathish, root: _Pathish | None = None) -> str:
    """Return ``path`` as shown in progress labels and status output.

    Args:
        path: File being reported, absolute or relative to ``root``.
        root: Workspace root; the current directory when omitted.

    Returns:
        str: POSIX path below ``root``, or the absolute path for files
        outside it.

    """

    base = _best_effort_resolve(Path.cwd() if root is None else Path(root).expanduser())
    target = Path(path).expanduser()
    resolved = _best_effort_resolve(target if target.is_absolute() else base / target)
    if resolved.is_relative_to(base):
        return resolved.relative_to(base).as_posix()
    return resolved.as_posix()


__all__ = (
    "PathResolver",
    "display_relative_path",
    "expand_home",
    "is_executable",
    "is_path_entry",
    "is_readable",
    "is_valid_file_name",
    "path_exists",
)
