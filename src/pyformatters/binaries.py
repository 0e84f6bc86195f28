# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the formatter binary to run for a file."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .cache import ResolutionCache
from .filesystem import PathResolver, expand_home, is_executable, is_valid_file_name
from .interfaces.reporting import Notifier
from .settings import compact

LOGGER = logging.getLogger(__name__)


class ResolutionScope(str, Enum):
    """Where a binary or configuration file was found."""

    LOCAL = "local"
    GLOBAL = "global"


@dataclass(frozen=True, slots=True)
class BinaryResolution:
    """Binary chosen for a file together with the scope that produced it."""

    path: str
    scope: ResolutionScope


class BinaryLocator:
    """Prefer repository-local binaries, falling back to a configured global path."""

    def __init__(self, name: str, *, resolver: PathResolver, notifier: Notifier) -> None:
        """Create a locator for formatter ``name``.

        Args:
            name: Formatter name used in error titles.
            resolver: Upward file search bounded by the repository root.
            notifier: Sink for configuration errors.
        """

        self.name = name
        self._resolver = resolver
        self._notifier = notifier
        self.local_bins: tuple[str, ...] = ()
        self.bin_path = ""
        self._local_cache: ResolutionCache[str, str | None] = ResolutionCache(f"{name} local binaries")

    def set_local_bins(self, value: Iterable[str] | None) -> None:
        """Replace the local candidate names.

        Empty entries are dropped. When any remaining entry is not a valid
        file name, one error naming it is reported and the list is emptied.
        """

        local_bins = compact(value)
        if local_bins == self.local_bins:
            return
        invalid = next((candidate for candidate in local_bins if not is_valid_file_name(candidate)), None)
        if invalid is not None:
            self._notifier.report_error(
                f"'{invalid}' is not a valid file name.",
                f"Invalid local binary path for {self.name}",
            )
            local_bins = ()
        self.local_bins = local_bins
        self._local_cache.invalidate()

    def set_global_bin_path(self, value: str | None) -> None:
        """Replace the global binary path after expanding ``~``.

        A path that does not point at an executable file is reported and
        cleared.
        """

        bin_path = expand_home(value or "")
        if bin_path == self.bin_path:
            return
        if not bin_path:
            self.bin_path = ""
            return
        if is_executable(bin_path):
            self.bin_path = bin_path
            return
        self._notifier.report_error(
            f"'{bin_path}' not found or not executable.",
            f"Invalid global binary path for {self.name}",
        )
        self.bin_path = ""

    def _find_local(self, file_path: str) -> str | None:
        for candidate in self.local_bins:
            found = self._resolver.find_in_repo(file_path, candidate)
            if found is not None:
                return str(found)
        return None

    def local_path(self, file_path: str) -> str | None:
        """Return the first local candidate found for ``file_path``."""

        return self._local_cache.get_or_compute(file_path, self._find_local)

    def global_path(self) -> str | None:
        """Return the validated global binary path, if configured."""

        return self.bin_path or None

    def resolve(self, file_path: str) -> BinaryResolution | None:
        """Return the binary for ``file_path``: local first, then global.

        Returns:
            BinaryResolution | None: ``None`` when neither scope yields a binary.
        """

        local = self.local_path(file_path)
        if local:
            return BinaryResolution(path=local, scope=ResolutionScope.LOCAL)
        global_path = self.global_path()
        if global_path:
            return BinaryResolution(path=global_path, scope=ResolutionScope.GLOBAL)
        LOGGER.debug("no binary found for %s on %s", self.name, file_path)
        return None

    @property
    def cache(self) -> ResolutionCache[str, str | None]:
        """Return the local resolution cache."""

        return self._local_cache


__all__ = ["BinaryLocator", "BinaryResolution", "ResolutionScope"]
