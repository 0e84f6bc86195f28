# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""A single named formatter bound to its settings."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from functools import partial

from .arguments import ArgumentBuilder
from .binaries import BinaryLocator, BinaryResolution
from .catalog import FormatterProfile
from .configs import ConfigLocator
from .debounce import Debouncer
from .events import CompositeSubscription
from .filesystem import PathResolver
from .interfaces.editor import Document
from .interfaces.reporting import Notifier
from .interfaces.settings import SettingsSource, SettingValue
from .process import ProcessRunner
from .settings import (
    GLOBAL_BIN_PATH,
    GLOBAL_CMD_ARGS,
    GLOBAL_CONFIGS,
    LOCAL_BINS,
    LOCAL_CMD_ARGS,
    LOCAL_CONFIGS,
    as_strings,
    formatter_key,
)

LOGGER = logging.getLogger(__name__)


class FormatterState(str, Enum):
    """Lifecycle of one ``format`` call."""

    IDLE = "idle"
    RESOLVING = "resolving"
    EXECUTING = "executing"
    FAILED_NO_BINARY = "failed-no-binary"


def _noop() -> None:
    return None


class FormatterUnit:
    """Resolve, build and execute one formatter for a document.

    The unit observes its six settings keys. The first value of every key is
    applied at construction; later changes to candidate lists and the global
    binary path are debounced, extra arguments apply immediately.
    """

    def __init__(
        self,
        profile: FormatterProfile,
        *,
        settings: SettingsSource,
        notifier: Notifier,
        runner: ProcessRunner,
        debouncer: Debouncer,
        resolver: PathResolver | None = None,
    ) -> None:
        """Bind ``profile`` to its settings.

        Args:
            profile: Formatter profile supplying default arguments.
            settings: Settings source observed for this formatter's keys.
            notifier: Sink for configuration errors and missing binaries.
            runner: Process runner executing the resolved binary.
            debouncer: Debouncer shared with the orchestrator.
            resolver: Upward file search; a fresh resolver when omitted.
        """

        self.profile = profile
        self._notifier = notifier
        self._runner = runner
        self._debouncer = debouncer
        path_resolver = resolver or PathResolver()
        self.binaries = BinaryLocator(profile.name, resolver=path_resolver, notifier=notifier)
        self.configs = ConfigLocator(profile.name, resolver=path_resolver, notifier=notifier)
        self.arguments = ArgumentBuilder(profile)
        self.state = FormatterState.IDLE
        self._ready = False
        self.subscriptions = CompositeSubscription(
            (
                settings.observe(self._key(LOCAL_BINS), partial(self._debounced, LOCAL_BINS, self._set_local_bins)),
                settings.observe(self._key(LOCAL_CMD_ARGS), self._set_local_cmd_args),
                settings.observe(
                    self._key(LOCAL_CONFIGS),
                    partial(self._debounced, LOCAL_CONFIGS, self._set_local_configs),
                ),
                settings.observe(
                    self._key(GLOBAL_BIN_PATH),
                    partial(self._debounced, GLOBAL_BIN_PATH, self._set_global_bin_path),
                ),
                settings.observe(self._key(GLOBAL_CMD_ARGS), self._set_global_cmd_args),
                settings.observe(
                    self._key(GLOBAL_CONFIGS),
                    partial(self._debounced, GLOBAL_CONFIGS, self._set_global_configs),
                ),
            ),
        )
        self._ready = True

    @property
    def name(self) -> str:
        """Return the registry name of the formatter."""

        return self.profile.name

    def _key(self, option: str) -> str:
        return formatter_key(self.name, option)

    def _debounced(self, option: str, apply: Callable[[SettingValue], None], value: SettingValue) -> None:
        if not self._ready:
            apply(value)
            return
        self._debouncer.call(self._key(option), apply, value)

    def _set_local_bins(self, value: SettingValue) -> None:
        self.binaries.set_local_bins(as_strings(value))

    def _set_global_bin_path(self, value: SettingValue) -> None:
        self.binaries.set_global_bin_path(value if isinstance(value, str) else "")

    def _set_local_configs(self, value: SettingValue) -> None:
        self.configs.set_local_configs(as_strings(value))

    def _set_global_configs(self, value: SettingValue) -> None:
        self.configs.set_global_configs(as_strings(value))

    def _set_local_cmd_args(self, value: SettingValue) -> None:
        self.arguments.set_local_cmd_args(as_strings(value))

    def _set_global_cmd_args(self, value: SettingValue) -> None:
        self.arguments.set_global_cmd_args(as_strings(value))

    def _transition(self, state: FormatterState) -> None:
        LOGGER.debug("%s: %s -> %s", self.name, self.state.value, state.value)
        self.state = state

    def resolve(self, file_path: str) -> BinaryResolution | None:
        """Return the binary that would run for ``file_path``."""

        return self.binaries.resolve(file_path)

    def command_for(self, file_path: str, use_buffer: bool) -> tuple[str, list[str]] | None:
        """Return the binary and arguments that would run for ``file_path``."""

        resolution = self.resolve(file_path)
        if resolution is None:
            return None
        config_path = self.configs.path_for(resolution.scope, file_path)
        return resolution.path, self.arguments.for_scope(resolution.scope, file_path, config_path, use_buffer)

    def format(self, document: Document, use_buffer: bool, next_step: Callable[[], None] = _noop) -> None:
        """Format ``document`` and call ``next_step`` exactly once afterwards.

        Args:
            document: Document to format.
            use_buffer: Pipe the buffer through stdin/stdout when ``True``;
                otherwise let the binary rewrite the file in place.
            next_step: Continuation fired after the run, also on failure.
        """

        file_path = document.path()
        if not file_path:
            self._notifier.report_error(None, f"Save the file before running {self.name}")
            next_step()
            return
        self._transition(FormatterState.RESOLVING)
        command = self.command_for(file_path, use_buffer)
        if command is None:
            self._transition(FormatterState.FAILED_NO_BINARY)
            self._notifier.report_error(None, f"Could not find binary for {self.name}")
            self._transition(FormatterState.IDLE)
            next_step()
            return
        binary, args = command
        self._transition(FormatterState.EXECUTING)
        self._runner.run(document, binary, args, use_buffer, partial(self._finish, next_step))

    def _finish(self, next_step: Callable[[], None]) -> None:
        self._transition(FormatterState.IDLE)
        next_step()

    def dispose(self) -> None:
        """Stop observing settings."""

        self.subscriptions.dispose()


__all__ = ["FormatterState", "FormatterUnit"]
