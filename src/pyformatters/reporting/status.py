# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status summary of the active document and configured orders."""

from __future__ import annotations

from dataclasses import dataclass

from rich.table import Table

from ..constants import PACKAGE_NAME


@dataclass(slots=True)
class StatusSnapshot:
    """Mutable status shown in place of an editor status bar tile.

    Attributes:
        document_path: Display path of the active document, if any.
        format_order: Formatters run by the ``format`` command.
        save_order: Formatters run when a document is saved.
        show_tick: ``True`` when format on save is enabled.
        show_tile: ``True`` when the active document is in formatting scope.
        visible: ``False`` when the ``statusBar`` setting hides the summary.
    """

    document_path: str | None = None
    format_order: tuple[str, ...] = ()
    save_order: tuple[str, ...] = ()
    show_tick: bool = False
    show_tile: bool = False
    visible: bool = True


def _describe(order: tuple[str, ...]) -> str:
    return " → ".join(order) if order else "not defined"


def status_tooltip(snapshot: StatusSnapshot) -> str:
    """Return a one-line summary of ``snapshot``."""

    tick = "on" if snapshot.show_tick else "off"
    return (
        f"Format: {_describe(snapshot.format_order)} | "
        f"On save ({tick}): {_describe(snapshot.save_order)}"
    )


def render_status(snapshot: StatusSnapshot) -> Table:
    """Return a Rich table describing ``snapshot``."""

    table = Table(title=PACKAGE_NAME, show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Document", snapshot.document_path or "-")
    table.add_row("In scope", "yes" if snapshot.show_tile else "no")
    table.add_row("Format order", _describe(snapshot.format_order))
    table.add_row("Format on save", "enabled" if snapshot.show_tick else "disabled")
    table.add_row("Save order", _describe(snapshot.save_order))
    return table


__all__ = ["StatusSnapshot", "render_status", "status_tooltip"]
