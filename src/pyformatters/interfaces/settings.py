# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Settings source interfaces used by push-based observers."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, TypeAlias, runtime_checkable

SettingValue: TypeAlias = str | bool | Sequence[str] | None
SettingCallback = Callable[[SettingValue], None]


@runtime_checkable
class Subscription(Protocol):
    """Handle returned by observers; disposing it stops notifications."""

    def dispose(self) -> None:
        """Stop delivering notifications to the subscribed callback."""

        raise NotImplementedError


@runtime_checkable
class SettingsSource(Protocol):
    """Key/value settings store with change observation."""

    def observe(self, key: str, callback: SettingCallback) -> Subscription:
        """Invoke ``callback`` with the current value of ``key`` now and on every change."""

        raise NotImplementedError

    def get(self, key: str) -> SettingValue:
        """Return the current value of ``key``."""

        raise NotImplementedError

    def toggle(self, key: str) -> bool:
        """Flip the boolean setting ``key`` and return the new value."""

        raise NotImplementedError


__all__ = ["SettingCallback", "SettingValue", "SettingsSource", "Subscription"]
