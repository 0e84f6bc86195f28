# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in formatter profiles and their default command-line policy."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final


@dataclass(frozen=True, slots=True)
class FormatterProfile:
    """Describe how a formatter executable is invoked.

    Attributes:
        name: Registry key and command suffix for the formatter.
        buffer_args: Default arguments when the buffer is piped through stdin.
        in_place_args: Default arguments when the binary rewrites the file.
        config_flag: Flag preceding the configuration file path.
        local_bins: Default candidate binaries searched inside the repository.
        local_configs: Default candidate configuration file names.
    """

    name: str
    buffer_args: tuple[str, ...] = ()
    in_place_args: tuple[str, ...] = ()
    config_flag: str = "--config"
    local_bins: tuple[str, ...] = field(default_factory=tuple)
    local_configs: tuple[str, ...] = field(default_factory=tuple)

    def default_args(self, use_buffer: bool) -> tuple[str, ...]:
        """Return the default arguments for buffer or in-place mode."""

        return self.buffer_args if use_buffer else self.in_place_args


def _venv_bins(binary: str) -> tuple[str, ...]:
    return (f".venv/bin/{binary}", f"venv/bin/{binary}", f"env/bin/{binary}")


BLACK: Final[FormatterProfile] = FormatterProfile(
    name="black",
    buffer_args=("-q",),
    in_place_args=("-q",),
    config_flag="--config",
    local_bins=_venv_bins("black"),
    local_configs=("pyproject.toml",),
)

ISORT: Final[FormatterProfile] = FormatterProfile(
    name="isort",
    buffer_args=("-q",),
    in_place_args=("-q",),
    config_flag="--settings-path",
    local_bins=_venv_bins("isort"),
    local_configs=(".isort.cfg", "pyproject.toml", "setup.cfg", "tox.ini"),
)

AUTOPEP8: Final[FormatterProfile] = FormatterProfile(
    name="autopep8",
    in_place_args=("--in-place",),
    config_flag="--global-config",
    local_bins=_venv_bins("autopep8"),
    local_configs=("setup.cfg", "tox.ini", ".pep8"),
)

YAPF: Final[FormatterProfile] = FormatterProfile(
    name="yapf",
    in_place_args=("--in-place",),
    config_flag="--style",
    local_bins=_venv_bins("yapf"),
    local_configs=(".style.yapf", "setup.cfg", "pyproject.toml"),
)

FORMATTER_PROFILES: Final[Mapping[str, FormatterProfile]] = MappingProxyType(
    {profile.name: profile for profile in (AUTOPEP8, BLACK, ISORT, YAPF)},
)


__all__ = [
    "AUTOPEP8",
    "BLACK",
    "FORMATTER_PROFILES",
    "FormatterProfile",
    "ISORT",
    "YAPF",
]
