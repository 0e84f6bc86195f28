# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers for repository-bounded lookups."""

from __future__ import annotations

from .paths import (
    PathResolver,
    display_relative_path,
    expand_home,
    is_executable,
    is_path_entry,
    is_readable,
    is_valid_file_name,
    path_exists,
)

__all__ = [
    "PathResolver",
    "display_relative_path",
    "expand_home",
    "is_executable",
    "is_path_entry",
    "is_readable",
    "is_valid_file_name",
    "path_exists",
]
