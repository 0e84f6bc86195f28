# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point driving formatters on files."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Future
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..constants import PACKAGE_NAME
from ..host import FileDocument
from ..process import build_command_line
from ..reporting import render_status, status_tooltip
from ..reporting.messages import fail, info, ok, warn
from ..runtime.console import detect_tty, get_console_manager
from ..settings import ON_SAVE_ENABLED_KEY, ConfigError
from .session import CLIOptions, CLISession, open_session
from .typer_ext import SortedTyper

CONFIG_ERROR_EXIT_CODE = 2
FAILURE_EXIT_CODE = 1
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = SortedTyper(
    name=PACKAGE_NAME,
    help="Run Python formatters on files in a configured order.",
    no_args_is_help=True,
    add_completion=False,
)

PathsArgument = Annotated[
    list[Path],
    typer.Argument(exists=True, dir_okay=False, resolve_path=True, help="Files to format."),
]
InPlaceOption = Annotated[
    bool,
    typer.Option("--in-place", help="Let formatters rewrite files instead of piping the buffer."),
]


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at debug level when ``verbose``."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format=_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    settings: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            exists=True,
            dir_okay=False,
            resolve_path=True,
            help="Settings file (formatters-python.toml or pyproject.toml).",
        ),
    ] = None,
    timeout: Annotated[
        float,
        typer.Option("--timeout", min=0.0, help="Seconds to wait for a formatter chain."),
    ] = 60.0,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Store options shared by all commands."""

    configure_logging(verbose)
    ctx.obj = CLIOptions(settings_path=settings, timeout=timeout)


def _options(ctx: typer.Context) -> CLIOptions:
    return ctx.obj if isinstance(ctx.obj, CLIOptions) else CLIOptions()


@contextmanager
def _session(ctx: typer.Context) -> Iterator[CLISession]:
    try:
        with open_session(_options(ctx)) as session:
            yield session
    except ConfigError as exc:
        fail(str(exc))
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc


def _await(chain: Future[None] | None, timeout: float, label: str) -> bool:
    if chain is None:
        return False
    try:
        chain.result(timeout=timeout)
    except TimeoutError:
        fail(f"Timed out after {timeout:g}s waiting for {label}")
        return False
    return True


def _format_files(
    session: CLISession,
    paths: Sequence[Path],
    timeout: float,
    start: Callable[[FileDocument], Future[None] | None],
    *,
    write_back: bool,
) -> bool:
    succeeded = True
    for path in paths:
        document = session.workspace.open(path)
        label = session.workspace.relativize(str(path))
        if not _await(start(document), timeout, label):
            succeeded = False
            continue
        if not write_back:
            document.reload()
            ok(f"Formatted {label}")
        elif document.modified:
            document.write()
            ok(f"Formatted {label}")
        else:
            info(f"Unchanged {label}")
    return succeeded and not session.notifier.history


def _exit_with(succeeded: bool) -> None:
    raise typer.Exit(code=0 if succeeded else FAILURE_EXIT_CODE)


@app.command("format")
def format_command(ctx: typer.Context, paths: PathsArgument, in_place: InPlaceOption = False) -> None:
    """Run the format order on each file."""

    options = _options(ctx)
    with _session(ctx) as session:
        orchestrator = session.orchestrator

        def start(document: FileDocument) -> Future[None] | None:
            if not in_place:
                return orchestrator.format_active()
            if not orchestrator.format_order:
                session.notifier.report_error(None, "Format order not defined")
                return None
            return orchestrator.format(document, orchestrator.format_order, use_buffer=False)

        succeeded = _format_files(session, paths, options.timeout, start, write_back=not in_place)
    _exit_with(succeeded)


@app.command("run")
def run_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Formatter to run.")],
    paths: PathsArgument,
    in_place: InPlaceOption = False,
) -> None:
    """Run a single formatter on each file."""

    options = _options(ctx)
    with _session(ctx) as session:
        orchestrator = session.orchestrator
        if name not in orchestrator.formatters:
            fail(f"'{name}' is not a valid formatter name.")
            raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)

        def start(document: FileDocument) -> Future[None] | None:
            if in_place:
                return orchestrator.format(document, (name,), use_buffer=False)
            return orchestrator.run_formatter(name)

        succeeded = _format_files(session, paths, options.timeout, start, write_back=not in_place)
    _exit_with(succeeded)


@app.command("save")
def save_command(ctx: typer.Context, paths: PathsArgument) -> None:
    """Save each file and let format on save rewrite it."""

    options = _options(ctx)
    with _session(ctx) as session:
        if not session.settings.get(ON_SAVE_ENABLED_KEY):
            warn("Format on save is disabled; files are saved unchanged")
        succeeded = True
        for path in paths:
            document = session.workspace.open(path)
            session.workspace.save(document)
            if not session.orchestrator.wait(options.timeout):
                fail(f"Timed out after {options.timeout:g}s waiting for {path.name}")
                succeeded = False
            document.reload()
        succeeded = succeeded and not session.notifier.history
    _exit_with(succeeded)


@app.command("resolve")
def resolve_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Formatter to resolve.")],
    path: Annotated[Path, typer.Argument(dir_okay=False, resolve_path=True, help="File the formatter would run on.")],
    in_place: InPlaceOption = False,
) -> None:
    """Show the binary, config and arguments a formatter would use."""

    with _session(ctx) as session:
        unit = session.orchestrator.formatters.get(name)
        if unit is None:
            fail(f"'{name}' is not a valid formatter name.")
            raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE)
        file_path = str(path)
        resolution = unit.resolve(file_path)
        if resolution is None:
            fail(f"Could not find binary for {name}")
            raise typer.Exit(code=FAILURE_EXIT_CODE)
        config_path = unit.configs.path_for(resolution.scope, file_path)
        args = unit.arguments.for_scope(resolution.scope, file_path, config_path, not in_place)
        table = Table(title=f"{name} on {session.workspace.relativize(file_path)}", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Binary", resolution.path)
        table.add_row("Scope", resolution.scope.value)
        table.add_row("Config", config_path or "-")
        table.add_row("Command", build_command_line(resolution.path, args))
        get_console_manager().get(color=detect_tty(), emoji=False).print(table)


@app.command("status")
def status_command(
    ctx: typer.Context,
    path: Annotated[
        Path | None,
        typer.Argument(exists=True, dir_okay=False, resolve_path=True, help="File to treat as active."),
    ] = None,
) -> None:
    """Show the configured orders and the state of format on save."""

    with _session(ctx) as session:
        if path is not None:
            session.workspace.open(path)
        snapshot = session.orchestrator.status
        if session.settings_path is not None:
            info(f"Settings: {session.workspace.relativize(str(session.settings_path))}")
        if snapshot.visible:
            get_console_manager().get(color=detect_tty(), emoji=False).print(render_status(snapshot))
        else:
            info(status_tooltip(snapshot))


__all__ = ["app", "configure_logging"]
