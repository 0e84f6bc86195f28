# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Headless workspace emitting the editor events the orchestrator listens to."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Future
from functools import partial
from pathlib import Path

from ..constants import PYTHON_SCOPE
from ..events import CallbackSubscription, Emitter
from ..filesystem import display_relative_path
from ..interfaces.editor import Document, DocumentCallback
from .document import FileDocument


def _without_payload(callback: Callable[[], None], _payload: object) -> None:
    callback()


def _reload_after(document: FileDocument, callback: Callable[[], object], _payload: object) -> None:
    result = callback()
    if isinstance(result, Future):
        result.add_done_callback(lambda _chain: document.reload())


class HeadlessWorkspace:
    """Track open documents, the active one, grammar scopes and saves."""

    def __init__(self, root: str | Path | None = None, *, scopes: Iterable[str] = (PYTHON_SCOPE,)) -> None:
        self.root = Path(root).resolve() if root is not None else Path.cwd()
        self.scopes = frozenset(scopes)
        self.documents: list[FileDocument] = []
        self._active: FileDocument | None = None
        self._opened: Emitter[Document] = Emitter()
        self._activated: Emitter[Document | None] = Emitter()
        self._saved: dict[FileDocument, Emitter[Document]] = {}
        self._scope_changed: dict[FileDocument, Emitter[Document]] = {}

    def open(self, path: str | Path, *, activate: bool = True) -> FileDocument:
        """Open ``path`` as a new document and optionally make it active."""

        document = FileDocument(path)
        self.documents.append(document)
        self._opened.emit(document)
        if activate:
            self.set_active(document)
        return document

    def set_active(self, document: FileDocument | None) -> None:
        """Focus ``document`` (or nothing)."""

        if document is self._active:
            return
        self._active = document
        self._activated.emit(document)

    def save(self, document: FileDocument) -> None:
        """Write ``document`` to disk and notify save observers."""

        document.write()
        emitter = self._saved.get(document)
        if emitter is not None:
            emitter.emit(document)

    def set_scope(self, document: FileDocument, scope: str) -> None:
        """Change the grammar scope of ``document`` and notify observers."""

        if document.scope == scope:
            return
        document.scope = scope
        emitter = self._scope_changed.get(document)
        if emitter is not None:
            emitter.emit(document)

    def get_active_document(self) -> FileDocument | None:
        """Return the focused document."""

        return self._active

    def on_saved(self, document: Document, callback: Callable[[], object]) -> CallbackSubscription:
        """Invoke ``callback`` after each save of ``document``.

        When ``callback`` returns a future, the document is reloaded from disk
        once it resolves so in-place rewrites reach the buffer.
        """

        owned = self._own(document)
        emitter = self._saved.setdefault(owned, Emitter())
        return emitter.subscribe(partial(_reload_after, owned, callback))

    def on_scope_changed(self, document: Document, callback: Callable[[], None]) -> CallbackSubscription:
        """Invoke ``callback`` now and after each scope change of ``document``."""

        emitter = self._scope_changed.setdefault(self._own(document), Emitter())
        subscription = emitter.subscribe(partial(_without_payload, callback))
        callback()
        return subscription

    def is_path_in_formatting_scope(self, document: Document) -> bool:
        """Return ``True`` when the grammar scope of ``document`` is handled."""

        return getattr(document, "scope", None) in self.scopes

    def observe_documents(self, callback: Callable[[Document], None]) -> CallbackSubscription:
        """Invoke ``callback`` for every open and every future document."""

        for document in self.documents:
            callback(document)
        return self._opened.subscribe(callback)

    def observe_active_document(self, callback: DocumentCallback) -> CallbackSubscription:
        """Invoke ``callback`` with the active document now and on change."""

        subscription = self._activated.subscribe(callback)
        callback(self._active)
        return subscription

    def relativize(self, path: str) -> str:
        """Return ``path`` relative to the workspace root."""

        return display_relative_path(path, self.root)

    @staticmethod
    def _own(document: Document) -> FileDocument:
        if not isinstance(document, FileDocument):
            raise TypeError(f"unsupported document type: {type(document).__name__}")
        return document


__all__ = ["HeadlessWorkspace"]
