# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run formatters one after another on a document."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import Future
from functools import partial

from .filesystem import display_relative_path
from .formatter import FormatterUnit
from .interfaces.editor import Document
from .interfaces.reporting import Notifier, ProgressSink

LOGGER = logging.getLogger(__name__)


class Sequencer:
    """Chain formatter runs so each starts after the previous one completed.

    Every formatter calls its continuation whatever the outcome, so a failing
    formatter never stops the chain and a chain never hangs.
    """

    def __init__(
        self,
        formatters: Mapping[str, FormatterUnit],
        *,
        progress: ProgressSink,
        notifier: Notifier,
        relativize: Callable[[str], str] = display_relative_path,
    ) -> None:
        self._formatters = formatters
        self._progress = progress
        self._notifier = notifier
        self._relativize = relativize

    def _display_path(self, document: Document) -> str:
        path = document.path()
        return self._relativize(path) if path else "untitled"

    def chain_label(self, document: Document) -> str:
        """Return the progress label covering a whole chain on ``document``."""

        return f"Formatters on {self._display_path(document)}"

    def step_label(self, name: str, document: Document) -> str:
        """Return the progress label of formatter ``name`` on ``document``."""

        return f"{name} on {self._display_path(document)}"

    def run_chain(self, document: Document, names: Sequence[str], use_buffer: bool = True) -> Future[None]:
        """Run ``names`` in order on ``document``.

        Args:
            document: Document to format.
            names: Formatter names in execution order.
            use_buffer: Pipe the buffer through the formatters when ``True``.

        Returns:
            Future[None]: Resolves once the last formatter has completed.
        """

        done: Future[None] = Future()
        pending = tuple(names)
        if not pending:
            self._progress.clear_progress(self.chain_label(document))
            done.set_result(None)
            return done
        LOGGER.debug("starting chain %s on %s", ", ".join(pending), document.path())
        self._progress.report_progress(self.chain_label(document))
        self._step(document, pending, use_buffer, done)
        return done

    def _step(self, document: Document, names: tuple[str, ...], use_buffer: bool, done: Future[None]) -> None:
        if not names:
            self._progress.clear_progress(self.chain_label(document))
            done.set_result(None)
            return
        name, rest = names[0], names[1:]
        unit = self._formatters.get(name)
        if unit is None:
            self._notifier.report_error(f"'{name}' is not a valid formatter name.", "Unknown formatter")
            self._step(document, rest, use_buffer, done)
            return
        label = self.step_label(name, document)
        self._progress.report_progress(label)
        unit.format(document, use_buffer, partial(self._advance, document, label, rest, use_buffer, done))

    def _advance(
        self,
        document: Document,
        label: str,
        rest: tuple[str, ...],
        use_buffer: bool,
        done: Future[None],
    ) -> None:
        self._progress.clear_progress(label)
        self._step(document, rest, use_buffer, done)


__all__ = ["Sequencer"]
