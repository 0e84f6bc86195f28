# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Editor host interfaces consumed by the formatter pipeline."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .settings import Subscription


@dataclass(frozen=True, slots=True)
class CursorPosition:
    """Zero-based cursor location inside a document buffer."""

    row: int = 0
    column: int = 0


@runtime_checkable
class Document(Protocol):
    """Text buffer bound to a file on disk."""

    def path(self) -> str | None:
        """Return the absolute path of the document, ``None`` when unsaved."""

        raise NotImplementedError

    def text(self) -> str:
        """Return the full buffer content."""

        raise NotImplementedError

    def set_text(self, text: str) -> None:
        """Replace the full buffer content with ``text``."""

        raise NotImplementedError

    def cursor_position(self) -> CursorPosition:
        """Return the current cursor position."""

        raise NotImplementedError

    def set_cursor_position(self, position: CursorPosition) -> None:
        """Move the cursor to ``position``, clamped to the buffer bounds."""

        raise NotImplementedError


DocumentCallback = Callable[[Document | None], None]


@runtime_checkable
class Workspace(Protocol):
    """Editor workspace exposing documents and their lifecycle events."""

    def get_active_document(self) -> Document | None:
        """Return the document currently focused, if any."""

        raise NotImplementedError

    def on_saved(self, document: Document, callback: Callable[[], object]) -> Subscription:
        """Invoke ``callback`` after every save of ``document``."""

        raise NotImplementedError

    def on_scope_changed(self, document: Document, callback: Callable[[], None]) -> Subscription:
        """Invoke ``callback`` immediately and whenever the grammar scope of ``document`` changes."""

        raise NotImplementedError

    def is_path_in_formatting_scope(self, document: Document) -> bool:
        """Return ``True`` when ``document`` should be handled by the formatters."""

        raise NotImplementedError

    def observe_documents(self, callback: Callable[[Document], None]) -> Subscription:
        """Invoke ``callback`` for every open document and each one opened later."""

        raise NotImplementedError

    def observe_active_document(self, callback: DocumentCallback) -> Subscription:
        """Invoke ``callback`` with the active document now and on every change."""

        raise NotImplementedError

    def relativize(self, path: str) -> str:
        """Return ``path`` relative to the project root for display."""

        raise NotImplementedError


__all__ = ["CursorPosition", "Document", "DocumentCallback", "Workspace"]
