# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for formatter argument assembly."""

from __future__ import annotations

from pyformatters.arguments import ArgumentBuilder, build_arguments, quote
from pyformatters.binaries import ResolutionScope
from pyformatters.catalog import AUTOPEP8, BLACK, ISORT


def test_quote_wraps_in_double_quotes() -> None:
    assert quote("/tmp/my file.py") == '"/tmp/my file.py"'


def test_buffer_mode_reads_stdin_with_config() -> None:
    args = build_arguments(BLACK, "/repo/mod.py", "/repo/pyproject.toml", True)

    assert args == ("-q", "--config", '"/repo/pyproject.toml"', "-")


def test_in_place_mode_passes_quoted_file() -> None:
    args = build_arguments(AUTOPEP8, "/repo/mod.py", None, False)

    assert args == ("--in-place", '"/repo/mod.py"')


def test_profile_specific_config_flag() -> None:
    args = build_arguments(ISORT, "/repo/mod.py", "/repo/.isort.cfg", True)

    assert args[1:3] == ("--settings-path", '"/repo/.isort.cfg"')


def test_scope_extras_come_first() -> None:
    builder = ArgumentBuilder(BLACK)
    builder.set_local_cmd_args(["--line-length", "100"])
    builder.set_global_cmd_args(["--fast"])

    local = builder.for_scope(ResolutionScope.LOCAL, "/repo/mod.py", None, True)
    global_ = builder.for_scope(ResolutionScope.GLOBAL, "/repo/mod.py", "", True)

    assert local == ["--line-length", "100", "-q", "-"]
    assert global_ == ["--fast", "-q", "-"]


def test_missing_extras_mean_no_extras() -> None:
    builder = ArgumentBuilder(AUTOPEP8)
    builder.set_local_cmd_args(None)

    assert builder.for_scope(ResolutionScope.LOCAL, "/repo/mod.py", None, False) == ["--in-place", '"/repo/mod.py"']
