# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Callback registries and disposable subscriptions."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from .interfaces.settings import Subscription

PayloadT = TypeVar("PayloadT")


class CallbackSubscription:
    """Subscription that runs ``on_dispose`` the first time it is disposed."""

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose: Callable[[], None] | None = on_dispose

    @property
    def disposed(self) -> bool:
        """Return ``True`` once :meth:`dispose` has been called."""

        return self._on_dispose is None

    def dispose(self) -> None:
        """Release the subscription; repeated calls are ignored."""

        on_dispose, self._on_dispose = self._on_dispose, None
        if on_dispose is not None:
            on_dispose()


class CompositeSubscription:
    """Group subscriptions so they can be released together."""

    def __init__(self, subscriptions: Iterable[Subscription] = ()) -> None:
        self._subscriptions: list[Subscription] = list(subscriptions)

    def add(self, *subscriptions: Subscription) -> None:
        """Track additional ``subscriptions``."""

        self._subscriptions.extend(subscriptions)

    def dispose(self) -> None:
        """Dispose every tracked subscription in reverse registration order."""

        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in reversed(subscriptions):
            subscription.dispose()

    def __len__(self) -> int:
        return len(self._subscriptions)


class Emitter(Generic[PayloadT]):
    """Ordered list of callbacks notified with a payload."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[PayloadT], None]] = []

    def subscribe(self, callback: Callable[[PayloadT], None]) -> CallbackSubscription:
        """Register ``callback`` and return the subscription that removes it."""

        self._callbacks.append(callback)
        return CallbackSubscription(lambda: self._discard(callback))

    def emit(self, payload: PayloadT) -> None:
        """Invoke every registered callback with ``payload``."""

        for callback in list(self._callbacks):
            callback(payload)

    def _discard(self, callback: Callable[[PayloadT], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def __len__(self) -> int:
        return len(self._callbacks)


__all__ = ["CallbackSubscription", "CompositeSubscription", "Emitter"]
