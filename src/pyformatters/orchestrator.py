# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Own the formatter registry and wire editor events to formatter chains."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import Future, wait
from functools import partial
from threading import Lock
from types import MappingProxyType

from .catalog import FORMATTER_PROFILES, FormatterProfile
from .constants import COMMAND_PREFIX
from .debounce import Debouncer
from .events import CompositeSubscription
from .filesystem import PathResolver
from .formatter import FormatterUnit
from .interfaces.editor import Document, Workspace
from .interfaces.reporting import Notifier
from .interfaces.settings import SettingsSource, SettingValue, Subscription
from .process import ProcessRunner
from .reporting.progress import ProgressTracker
from .reporting.status import StatusSnapshot
from .sequencer import Sequencer
from .settings import (
    BUSY_SIGNAL_KEY,
    FORMAT_ORDER_KEY,
    ON_SAVE_ENABLED_KEY,
    SAVE_ORDER_KEY,
    STATUS_BAR_KEY,
    as_strings,
    compact,
)

LOGGER = logging.getLogger(__name__)

FORMAT_COMMAND = "format"
TOGGLE_FORMAT_ON_SAVE_COMMAND = "toggle-format-on-save"


class _DocumentWatch:
    """Keep a save subscription alive while a document is in formatting scope."""

    def __init__(self, orchestrator: Orchestrator, document: Document) -> None:
        self._orchestrator = orchestrator
        self._document = document
        self._save_subscription: Subscription | None = None

    def refresh(self) -> None:
        """Re-evaluate the scope of the document after a grammar change."""

        self.dispose()
        workspace = self._orchestrator.workspace
        if workspace.is_path_in_formatting_scope(self._document):
            self._save_subscription = workspace.on_saved(
                self._document,
                partial(self._orchestrator.format_on_save, self._document),
            )

    def dispose(self) -> None:
        """Drop the save subscription, if any."""

        if self._save_subscription is not None:
            self._save_subscription.dispose()
            self._save_subscription = None


class Orchestrator:
    """Registry of named formatters plus the manual and on-save orders.

    :meth:`initialize` builds one :class:`FormatterUnit` per profile, starts
    observing the global settings and the workspace, and registers the
    commands. :meth:`shutdown` releases everything again.
    """

    def __init__(
        self,
        *,
        workspace: Workspace,
        settings: SettingsSource,
        notifier: Notifier,
        progress: ProgressTracker | None = None,
        runner: ProcessRunner | None = None,
        debouncer: Debouncer | None = None,
        resolver: PathResolver | None = None,
        profiles: Mapping[str, FormatterProfile] = FORMATTER_PROFILES,
    ) -> None:
        """Create an orchestrator; nothing is observed until :meth:`initialize`.

        Args:
            workspace: Editor workspace supplying documents and events.
            settings: Settings source holding global and per-formatter keys.
            notifier: Sink for configuration errors and formatter failures.
            progress: Busy-signal tracker; a new tracker when omitted.
            runner: Process runner shared by all formatters.
            debouncer: Debouncer for order and candidate-list changes.
            resolver: Upward file search shared by all formatters.
            profiles: Formatter profiles to register.
        """

        self.workspace = workspace
        self._settings = settings
        self._notifier = notifier
        self.progress = progress or ProgressTracker()
        self._runner = runner or ProcessRunner(notifier=notifier)
        self._debouncer = debouncer or Debouncer()
        self._resolver = resolver or PathResolver()
        self._profiles = profiles
        self._formatters: dict[str, FormatterUnit] = {}
        self.formatters: Mapping[str, FormatterUnit] = MappingProxyType(self._formatters)
        self.format_order: tuple[str, ...] = ()
        self.save_order: tuple[str, ...] = ()
        self.status = StatusSnapshot()
        self.sequencer = Sequencer(
            self.formatters,
            progress=self.progress,
            notifier=notifier,
            relativize=workspace.relativize,
        )
        self._commands: dict[str, Callable[[], object]] = {}
        self._subscriptions = CompositeSubscription()
        self._active_scope: Subscription | None = None
        self._pending: set[Future[None]] = set()
        self._pending_lock = Lock()
        self._initialized = False
        self._ready = False

    # Lifecycle ---------------------------------------------------------------

    def initialize(self) -> None:
        """Register formatters, commands and observers."""

        if self._initialized:
            return
        self._initialized = True
        for name, profile in self._profiles.items():
            self._formatters[name] = FormatterUnit(
                profile,
                settings=self._settings,
                notifier=self._notifier,
                runner=self._runner,
                debouncer=self._debouncer,
                resolver=self._resolver,
            )
        self._commands = {
            FORMAT_COMMAND: self.format_active,
            TOGGLE_FORMAT_ON_SAVE_COMMAND: self.toggle_format_on_save,
        }
        for name in self._formatters:
            self._commands[name] = partial(self.run_formatter, name)
        self._subscriptions.add(
            self._settings.observe(FORMAT_ORDER_KEY, partial(self._debounced, FORMAT_ORDER_KEY, self.set_format_order)),
            self._settings.observe(SAVE_ORDER_KEY, partial(self._debounced, SAVE_ORDER_KEY, self.set_save_order)),
            self._settings.observe(BUSY_SIGNAL_KEY, self._set_busy_signal),
            self._settings.observe(STATUS_BAR_KEY, self._set_status_bar),
            self._settings.observe(ON_SAVE_ENABLED_KEY, self._set_on_save_enabled),
            self.workspace.observe_documents(self._watch_document),
            self.workspace.observe_active_document(self._set_active_document),
        )
        self._ready = True
        LOGGER.debug("initialized formatters: %s", ", ".join(self._formatters))

    def shutdown(self) -> None:
        """Dispose observers and formatters and stop pending debounced updates."""

        self._debouncer.cancel_all()
        if self._active_scope is not None:
            self._active_scope.dispose()
            self._active_scope = None
        self._subscriptions.dispose()
        for unit in self._formatters.values():
            unit.dispose()
        self._runner.shutdown()
        self._commands = {}
        self._ready = False

    # Orders ------------------------------------------------------------------

    def _debounced(self, key: str, apply: Callable[[SettingValue], None], value: SettingValue) -> None:
        if not self._ready:
            apply(value)
            return
        self._debouncer.call(key, apply, value)

    def _validated_order(self, order: tuple[str, ...], title: str) -> tuple[str, ...]:
        for name in order:
            if name not in self._formatters:
                self._notifier.report_error(f"'{name}' is not a valid formatter name.", title)
                return ()
        return order

    def set_format_order(self, value: SettingValue) -> None:
        """Replace the manual order; an unknown name empties it."""

        order = compact(as_strings(value))
        if order == self.format_order:
            return
        self.format_order = self._validated_order(order, "Invalid format order")
        self.status.format_order = self.format_order

    def set_save_order(self, value: SettingValue) -> None:
        """Replace the on-save order; an unknown name empties it."""

        order = compact(as_strings(value))
        if order == self.save_order:
            return
        self.save_order = self._validated_order(order, "Invalid format on save order")
        self.status.save_order = self.save_order

    # Settings toggles ----------------------------------------------------------

    def _set_busy_signal(self, value: SettingValue) -> None:
        self.progress.set_enabled(bool(value))

    def _set_status_bar(self, value: SettingValue) -> None:
        self.status.visible = bool(value)

    def _set_on_save_enabled(self, value: SettingValue) -> None:
        self.status.show_tick = bool(value)

    # Workspace wiring ------------------------------------------------------------

    def _watch_document(self, document: Document) -> None:
        watch = _DocumentWatch(self, document)
        self._subscriptions.add(watch, self.workspace.on_scope_changed(document, watch.refresh))

    def _set_active_document(self, document: Document | None) -> None:
        if self._active_scope is not None:
            self._active_scope.dispose()
            self._active_scope = None
        path = document.path() if document is not None else None
        self.status.document_path = self.workspace.relativize(path) if path else None
        if document is None:
            self.status.show_tile = False
            return
        self._active_scope = self.workspace.on_scope_changed(document, partial(self._refresh_tile, document))

    def _refresh_tile(self, document: Document) -> None:
        self.status.show_tile = self.workspace.is_path_in_formatting_scope(document)

    # Formatting ------------------------------------------------------------------

    def format(self, document: Document, names: Sequence[str], *, use_buffer: bool = True) -> Future[None]:
        """Run ``names`` in order on ``document``."""

        chain = self.sequencer.run_chain(document, names, use_buffer)
        with self._pending_lock:
            self._pending.add(chain)
        chain.add_done_callback(self._forget)
        return chain

    def _forget(self, chain: Future[None]) -> None:
        with self._pending_lock:
            self._pending.discard(chain)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every running chain has finished.

        Args:
            timeout: Maximum number of seconds to wait, ``None`` for no limit.

        Returns:
            bool: ``True`` when no chain is left running.
        """

        with self._pending_lock:
            pending = list(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def format_on_save(self, document: Document) -> Future[None] | None:
        """Run the save order in place when format on save is enabled."""

        if not self._settings.get(ON_SAVE_ENABLED_KEY):
            return None
        if not self.save_order:
            self._notifier.report_error(None, "Format on save order not defined")
            return None
        return self.format(document, self.save_order, use_buffer=False)

    def format_active(self) -> Future[None] | None:
        """Run the manual order on the active document."""

        if not self.format_order:
            self._notifier.report_error(None, "Format order not defined")
            return None
        document = self.workspace.get_active_document()
        if document is None:
            return None
        return self.format(document, self.format_order)

    def run_formatter(self, name: str) -> Future[None] | None:
        """Run formatter ``name`` alone on the active document."""

        document = self.workspace.get_active_document()
        if document is None:
            return None
        return self.format(document, (name,))

    def toggle_format_on_save(self) -> bool:
        """Flip ``onSave.enabled`` and return the new value."""

        return self._settings.toggle(ON_SAVE_ENABLED_KEY)

    # Commands --------------------------------------------------------------------

    def command_names(self) -> tuple[str, ...]:
        """Return the fully qualified command names."""

        return tuple(f"{COMMAND_PREFIX}:{name}" for name in self._commands)

    def dispatch(self, command: str) -> object:
        """Run the command named ``command`` (qualified or bare).

        Raises:
            KeyError: If no such command is registered.
        """

        prefix = f"{COMMAND_PREFIX}:"
        bare = command[len(prefix) :] if command.startswith(prefix) else command
        handler = self._commands.get(bare)
        if handler is None:
            raise KeyError(f"Unknown command: {command}")
        return handler()


__all__ = ["FORMAT_COMMAND", "Orchestrator", "TOGGLE_FORMAT_ON_SAVE_COMMAND"]
