# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the configuration file passed to a formatter."""

from __future__ import annotations

from collections.abc import Iterable

from .binaries import ResolutionScope
from .cache import ResolutionCache
from .filesystem import PathResolver, expand_home, is_path_entry, is_readable, is_valid_file_name
from .interfaces.reporting import Notifier
from .settings import compact


class ConfigLocator:
    """Pick the first usable configuration file from ordered candidates.

    Candidates starting with ``/`` or ``~`` are paths used as-is after home
    expansion. Other candidates are file names searched upward from the
    formatted file, bounded by the repository root. Failing to find any
    candidate is not an error: the formatter then runs without a config flag.
    """

    def __init__(self, name: str, *, resolver: PathResolver, notifier: Notifier) -> None:
        self.name = name
        self._resolver = resolver
        self._notifier = notifier
        self.local_configs: tuple[str, ...] = ()
        self.global_configs: tuple[str, ...] = ()
        self._caches: dict[ResolutionScope, ResolutionCache[str, str | None]] = {
            scope: ResolutionCache(f"{name} {scope.value} configs") for scope in ResolutionScope
        }

    def _validate(self, configs: tuple[str, ...], scope: ResolutionScope) -> bool:
        for candidate in configs:
            if is_path_entry(candidate):
                config_path = expand_home(candidate)
                if is_readable(config_path):
                    continue
                self._notifier.report_error(
                    f"'{config_path}' not found or not readable.",
                    f"Invalid {scope.value} config path for {self.name}",
                )
                return False
            if not is_valid_file_name(candidate):
                self._notifier.report_error(
                    f"'{candidate}' is not a valid file name.",
                    f"Invalid {scope.value} configs for {self.name}",
                )
                return False
        return True

    def _replace(self, scope: ResolutionScope, value: Iterable[str] | None) -> None:
        configs = compact(value)
        if configs == self.candidates(scope):
            return
        self._store(scope, configs if self._validate(configs, scope) else ())
        self._caches[scope].invalidate()

    def _store(self, scope: ResolutionScope, configs: tuple[str, ...]) -> None:
        if scope is ResolutionScope.LOCAL:
            self.local_configs = configs
        else:
            self.global_configs = configs

    def candidates(self, scope: ResolutionScope) -> tuple[str, ...]:
        """Return the active candidate list of ``scope``."""

        return self.local_configs if scope is ResolutionScope.LOCAL else self.global_configs

    def set_local_configs(self, value: Iterable[str] | None) -> None:
        """Replace the local candidates; any invalid entry empties the list."""

        self._replace(ResolutionScope.LOCAL, value)

    def set_global_configs(self, value: Iterable[str] | None) -> None:
        """Replace the global candidates; any invalid entry empties the list."""

        self._replace(ResolutionScope.GLOBAL, value)

    def _find(self, file_path: str, configs: tuple[str, ...]) -> str | None:
        for candidate in configs:
            if is_path_entry(candidate):
                config_path = expand_home(candidate)
                if config_path:
                    return config_path
                continue
            found = self._resolver.find_in_repo(file_path, candidate)
            if found is not None:
                return str(found)
        return None

    def path_for(self, scope: ResolutionScope, file_path: str) -> str | None:
        """Return the configuration file of ``scope`` for ``file_path``, if any."""

        return self._caches[scope].get_or_compute(file_path, lambda key: self._find(key, self.candidates(scope)))

    def local_path(self, file_path: str) -> str | None:
        """Return the local configuration file for ``file_path``."""

        return self.path_for(ResolutionScope.LOCAL, file_path)

    def global_path(self, file_path: str) -> str | None:
        """Return the global configuration file for ``file_path``."""

        return self.path_for(ResolutionScope.GLOBAL, file_path)

    def cache(self, scope: ResolutionScope) -> ResolutionCache[str, str | None]:
        """Return the resolution cache of ``scope``."""

        return self._caches[scope]


__all__ = ["ConfigLocator"]
