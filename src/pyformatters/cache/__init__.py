# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Cache primitives shared by the resolution components."""

from __future__ import annotations

from .resolution import CacheInfo, ResolutionCache

__all__ = ["CacheInfo", "ResolutionCache"]
