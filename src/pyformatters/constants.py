# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for formatter resolution and execution."""

from __future__ import annotations

from typing import Final

PACKAGE_NAME: Final[str] = "formatters-python"
COMMAND_PREFIX: Final[str] = PACKAGE_NAME

REPOSITORY_MARKER: Final[str] = ".git"
STDIN_MARKER: Final[str] = "-"

SETTINGS_DEBOUNCE_SECONDS: Final[float] = 1.0

PYTHON_SCOPE: Final[str] = "source.python"
PYTHON_SUFFIXES: Final[frozenset[str]] = frozenset({".py", ".pyi"})

SETTINGS_FILE_NAME: Final[str] = "formatters-python.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = PACKAGE_NAME

__all__ = [
    "COMMAND_PREFIX",
    "PACKAGE_NAME",
    "PYPROJECT_FILE_NAME",
    "PYPROJECT_SECTION_KEY",
    "PYPROJECT_TOOL_KEY",
    "PYTHON_SCOPE",
    "PYTHON_SUFFIXES",
    "REPOSITORY_MARKER",
    "SETTINGS_DEBOUNCE_SECONDS",
    "SETTINGS_FILE_NAME",
    "STDIN_MARKER",
]
