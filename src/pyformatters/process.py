# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Spawn formatter binaries and apply their output to documents."""

from __future__ import annotations

import logging
import subprocess  # nosec B404
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .arguments import quote
from .interfaces.editor import CursorPosition, Document
from .interfaces.process import ProcessHandle, Spawner
from .interfaces.reporting import Notifier

LOGGER = logging.getLogger(__name__)

_THREAD_NAME_PREFIX: Final[str] = "formatter"
_PROCESS_ERRORS: Final[tuple[type[Exception], ...]] = (OSError, ValueError, subprocess.SubprocessError)


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Captured result of one formatter process.

    Attributes:
        command_line: Shell command line that was executed.
        returncode: Exit status reported by the process. Recorded only; it is
            never used to decide whether output is applied.
        stdout: Everything written to standard output.
        stderr: Everything written to standard error.
    """

    command_line: str
    returncode: int | None
    stdout: str
    stderr: str


@dataclass(frozen=True, slots=True)
class _Invocation:
    process: ProcessHandle
    document: Document
    cursor: CursorPosition
    input_text: str | None
    use_buffer: bool
    command_line: str
    on_complete: Callable[[], None]


def build_command_line(command: str, args: Sequence[str]) -> str:
    """Join ``command`` and ``args`` into a shell command line.

    Arguments are used verbatim; callers quote paths themselves. The command
    is quoted only when it contains whitespace.
    """

    head = quote(command) if any(char.isspace() for char in command) else command
    return " ".join((head, *args))


def spawn_shell(command_line: str, *, use_stdin: bool, cwd: Path | None) -> subprocess.Popen[str]:
    """Start ``command_line`` through the shell with captured text streams."""

    return subprocess.Popen(  # nosec B602
        command_line,
        shell=True,
        cwd=str(cwd) if cwd is not None else None,
        stdin=subprocess.PIPE if use_stdin else subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )


class ProcessRunner:
    """Run formatter processes without blocking the caller.

    :meth:`run` spawns the process and returns immediately. Waiting for exit
    happens on an executor; once the process has exited the output is applied
    and ``on_complete`` is invoked exactly once, whatever happened.
    """

    def __init__(
        self,
        *,
        notifier: Notifier,
        spawner: Spawner = spawn_shell,
        executor: Executor | None = None,
    ) -> None:
        """Create a runner.

        Args:
            notifier: Sink for stderr output and spawn failures.
            spawner: Callable starting a shell command line.
            executor: Executor used to wait for processes. A thread pool owned
                by the runner is created when omitted.
        """

        self._notifier = notifier
        self._spawner = spawner
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(thread_name_prefix=_THREAD_NAME_PREFIX)

    def run(
        self,
        document: Document,
        command: str,
        args: Sequence[str],
        use_buffer: bool,
        on_complete: Callable[[], None],
    ) -> Future[ProcessOutcome | None]:
        """Execute ``command`` with ``args`` for ``document``.

        Args:
            document: Document being formatted.
            command: Resolved binary path.
            args: Arguments built for the invocation.
            use_buffer: Pipe the document text through stdin and replace the
                buffer with stdout when ``True``; otherwise the binary rewrites
                the file itself.
            on_complete: Callback fired once after the process has finished.

        Returns:
            Future[ProcessOutcome | None]: Resolves to the captured outcome, or
            ``None`` when the process could not be started or waited on.
        """

        command_line = build_command_line(command, args)
        file_path = document.path()
        cwd = Path(file_path).parent if file_path else None
        LOGGER.debug("running %s", command_line)
        try:
            process = self._spawner(command_line, use_stdin=use_buffer, cwd=cwd)
        except _PROCESS_ERRORS as exc:
            self._notifier.report_error(str(exc), f"Failed to start {command}")
            self._complete(on_complete, command_line)
            failed: Future[ProcessOutcome | None] = Future()
            failed.set_result(None)
            return failed
        invocation = _Invocation(
            process=process,
            document=document,
            cursor=document.cursor_position(),
            input_text=document.text() if use_buffer else None,
            use_buffer=use_buffer,
            command_line=command_line,
            on_complete=on_complete,
        )
        return self._executor.submit(self._wait, invocation)

    def _wait(self, invocation: _Invocation) -> ProcessOutcome | None:
        try:
            try:
                stdout, stderr = invocation.process.communicate(invocation.input_text)
            except _PROCESS_ERRORS as exc:
                self._notifier.report_error(str(exc), f"Failed to run {invocation.command_line}")
                return None
            outcome = ProcessOutcome(
                command_line=invocation.command_line,
                returncode=invocation.process.returncode,
                stdout=stdout or "",
                stderr=stderr or "",
            )
            LOGGER.debug("%s exited with status %s", outcome.command_line, outcome.returncode)
            if outcome.stderr:
                self._notifier.report_error(outcome.stderr, outcome.command_line)
            if invocation.use_buffer:
                invocation.document.set_text(outcome.stdout)
                invocation.document.set_cursor_position(invocation.cursor)
            return outcome
        finally:
            self._complete(invocation.on_complete, invocation.command_line)

    def _complete(self, on_complete: Callable[[], None], command_line: str) -> None:
        try:
            on_complete()
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("continuation after %s failed", command_line)
            self._notifier.report_error(str(exc), f"Failed to continue after {command_line}")

    def shutdown(self, *, wait: bool = True) -> None:
        """Release the executor when the runner created it."""

        if self._owns_executor:
            self._executor.shutdown(wait=wait)


__all__ = ["ProcessOutcome", "ProcessRunner", "build_command_line", "spawn_shell"]
