# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application whose help output lists options alphabetically."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import typer
from click.core import Context, Parameter
from click.formatting import HelpFormatter
from typer.core import TyperCommand, TyperGroup

CommandCallback = TypeVar("CommandCallback", bound=Callable[..., Any])


def _sort_key(param: Parameter) -> str:
    names = (*getattr(param, "opts", ()), *getattr(param, "secondary_opts", ()))
    long_names = [name for name in names if name.startswith("--")]
    primary = long_names[0] if long_names else next(iter(names), param.name or "")
    return primary.lstrip("-").lower()


class SortedCommand(TyperCommand):
    """Command rendering arguments first and options sorted by long name."""

    def format_options(self, ctx: Context, formatter: HelpFormatter) -> None:
        arguments: list[tuple[str, str]] = []
        options: list[tuple[str, tuple[str, str]]] = []
        for param in self.get_params(ctx):
            record = param.get_help_record(ctx)
            if record is None:
                continue
            if param.param_type_name == "argument":
                arguments.append(record)
            else:
                options.append((_sort_key(param), record))
        if arguments:
            with formatter.section("Arguments"):
                formatter.write_dl(arguments)
        if options:
            with formatter.section("Options"):
                formatter.write_dl([record for _, record in sorted(options, key=lambda item: item[0])])


class SortedGroup(TyperGroup):
    """Group creating :class:`SortedCommand` instances."""

    command_class = SortedCommand


class SortedTyper(typer.Typer):
    """Typer application defaulting to sorted help output."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("cls", SortedGroup)
        super().__init__(*args, **kwargs)

    def command(
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Callable[[CommandCallback], CommandCallback]:
        """Register a command using :class:`SortedCommand` unless ``cls`` is given."""

        return super().command(name, cls=cls or SortedCommand, **kwargs)


__all__ = ["SortedCommand", "SortedGroup", "SortedTyper"]
