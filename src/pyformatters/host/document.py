# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Disk-backed documents for running formatters outside an editor."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from ..constants import PYTHON_SCOPE, PYTHON_SUFFIXES
from ..interfaces.editor import CursorPosition

PLAIN_TEXT_SCOPE: Final[str] = "text.plain"


def scope_for_path(path: str | Path | None) -> str:
    """Return the grammar scope implied by the suffix of ``path``."""

    if path is not None and Path(path).suffix in PYTHON_SUFFIXES:
        return PYTHON_SCOPE
    return PLAIN_TEXT_SCOPE


class FileDocument:
    """In-memory buffer of a file with a cursor.

    The buffer is loaded from disk on creation. :meth:`write` persists it and
    :meth:`reload` replaces it with the current file content, which is how
    results of in-place formatting reach the buffer.
    """

    def __init__(self, path: str | Path | None, *, text: str | None = None, scope: str | None = None) -> None:
        self._path = str(Path(path).resolve()) if path is not None else None
        if text is None:
            text = self._read(self._path) if self._path is not None and Path(self._path).is_file() else ""
        self._text = text
        self._cursor = CursorPosition()
        self.scope = scope or scope_for_path(self._path)
        self.modified = False

    @staticmethod
    def _read(path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def path(self) -> str | None:
        """Return the absolute path of the document."""

        return self._path

    def text(self) -> str:
        """Return the buffer content."""

        return self._text

    def set_text(self, text: str) -> None:
        """Replace the buffer content and keep the cursor inside it."""

        if text == self._text:
            return
        self._text = text
        self.modified = True
        self._cursor = self._clamp(self._cursor)

    def cursor_position(self) -> CursorPosition:
        """Return the cursor position."""

        return self._cursor

    def set_cursor_position(self, position: CursorPosition) -> None:
        """Move the cursor, clamped to the buffer bounds."""

        self._cursor = self._clamp(position)

    def _clamp(self, position: CursorPosition) -> CursorPosition:
        lines = self._text.split("\n")
        row = min(max(position.row, 0), len(lines) - 1)
        column = min(max(position.column, 0), len(lines[row]))
        return CursorPosition(row=row, column=column)

    def reload(self) -> None:
        """Replace the buffer with the file content on disk."""

        if self._path is None:
            return
        self._text = self._read(self._path)
        self._cursor = self._clamp(self._cursor)
        self.modified = False

    def write(self) -> None:
        """Persist the buffer to disk.

        Raises:
            ValueError: If the document has no path.
        """

        if self._path is None:
            raise ValueError("cannot write a document without a path")
        Path(self._path).write_text(self._text, encoding="utf-8")
        self.modified = False

    def __repr__(self) -> str:
        return f"FileDocument({self._path!r})"


__all__ = ["FileDocument", "PLAIN_TEXT_SCOPE", "scope_for_path"]
