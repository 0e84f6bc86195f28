# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Explicitly invalidated caches for per-file path resolutions.

Resolution results depend on candidate lists that change whenever the user
edits their settings. Instead of hiding memoization behind a decorator the
owner keeps a :class:`ResolutionCache` and calls :meth:`ResolutionCache.invalidate`
from the setting's change handler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from threading import Lock
from typing import Generic, TypeVar

LOGGER = logging.getLogger(__name__)

KeyT = TypeVar("KeyT", bound=Hashable)
ValueT = TypeVar("ValueT")


@dataclass(frozen=True, slots=True)
class CacheInfo:
    """Describe the state of a resolution cache.

    Attributes:
        current_size: Number of cached entries currently stored.
        hits: Number of lookups answered from the cache.
        misses: Number of lookups that had to compute a value.
    """

    current_size: int
    hits: int
    misses: int


class ResolutionCache(Generic[KeyT, ValueT]):
    """Map resolution inputs to results, caching absence as well as hits."""

    def __init__(self, name: str) -> None:
        """Initialise an empty cache.

        Args:
            name: Label used in debug logging when the cache is invalidated.
        """

        self.name = name
        self._store: dict[KeyT, ValueT] = {}
        self._lock = Lock()
        self._hits = 0
        self._misses = 0
        self._generation = 0

    def get_or_compute(self, key: KeyT, compute: Callable[[KeyT], ValueT]) -> ValueT:
        """Return the cached value for ``key``, computing it on first access.

        Args:
            key: Resolution input, typically the absolute file path.
            compute: Callable producing the value when ``key`` is not cached.

        Returns:
            ValueT: Cached or freshly computed value. ``None`` results are cached.
            A value computed while the cache was invalidated is returned but
            not stored.
        """

        with self._lock:
            if key in self._store:
                self._hits += 1
                return self._store[key]
            generation = self._generation
        value = compute(key)
        with self._lock:
            self._misses += 1
            if generation == self._generation:
                self._store[key] = value
            else:
                LOGGER.debug("discarded stale %s entry for %s", self.name, key)
        return value

    def invalidate(self) -> None:
        """Drop every cached entry."""

        with self._lock:
            dropped = len(self._store)
            self._store.clear()
            self._generation += 1
        if dropped:
            LOGGER.debug("invalidated %d entries from %s", dropped, self.name)

    def info(self) -> CacheInfo:
        """Return cache statistics."""

        with self._lock:
            return CacheInfo(current_size=len(self._store), hits=self._hits, misses=self._misses)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


__all__ = ["CacheInfo", "ResolutionCache"]
