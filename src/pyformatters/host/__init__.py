# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Headless editor host used by the command line and the tests."""

from __future__ import annotations

from .document import PLAIN_TEXT_SCOPE, FileDocument, scope_for_path
from .workspace import HeadlessWorkspace

__all__ = ["FileDocument", "HeadlessWorkspace", "PLAIN_TEXT_SCOPE", "scope_for_path"]
