# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings schema, TOML loading and the observable settings store."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .catalog import FORMATTER_PROFILES, FormatterProfile
from .constants import (
    PYPROJECT_FILE_NAME,
    PYPROJECT_SECTION_KEY,
    PYPROJECT_TOOL_KEY,
    SETTINGS_FILE_NAME,
)
from .events import CallbackSubscription, Emitter
from .interfaces.settings import SettingCallback, SettingValue

LOGGER = logging.getLogger(__name__)

FORMAT_ORDER_KEY: Final[str] = "formatOrder"
ON_SAVE_ENABLED_KEY: Final[str] = "onSave.enabled"
SAVE_ORDER_KEY: Final[str] = "onSave.saveOrder"
ERROR_HANDLING_KEY: Final[str] = "errorHandling"
BUSY_SIGNAL_KEY: Final[str] = "busySignal"
STATUS_BAR_KEY: Final[str] = "statusBar"

LOCAL_BINS: Final[str] = "local.bins"
LOCAL_CMD_ARGS: Final[str] = "local.cmdArgs"
LOCAL_CONFIGS: Final[str] = "local.configs"
GLOBAL_BIN_PATH: Final[str] = "global.binPath"
GLOBAL_CMD_ARGS: Final[str] = "global.cmdArgs"
GLOBAL_CONFIGS: Final[str] = "global.configs"


class ConfigError(Exception):
    """Raised when a settings file cannot be read or validated."""


class ErrorHandling(str, Enum):
    """Enumerate how reported errors reach the user."""

    HIDE = "hide"
    SHOW = "show"
    TRANSIENT = "transient"


def formatter_key(name: str, option: str) -> str:
    """Return the namespaced settings key for ``option`` of formatter ``name``."""

    return f"{name}.{option}"


class _SettingsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class LocalSettings(_SettingsModel):
    """Repository-local resolution settings of one formatter."""

    bins: list[str] | None = None
    cmd_args: list[str] = Field(default_factory=list, alias="cmdArgs")
    configs: list[str] | None = None


class GlobalSettings(_SettingsModel):
    """Fallback resolution settings of one formatter."""

    bin_path: str = Field(default="", alias="binPath")
    cmd_args: list[str] = Field(default_factory=list, alias="cmdArgs")
    configs: list[str] = Field(default_factory=list)


class FormatterSettings(_SettingsModel):
    """Local and global settings of one formatter."""

    local: LocalSettings = Field(default_factory=LocalSettings)
    global_: GlobalSettings = Field(default_factory=GlobalSettings, alias="global")


class OnSaveSettings(_SettingsModel):
    """Format-on-save behaviour."""

    enabled: bool = False
    save_order: list[str] = Field(default_factory=list, alias="saveOrder")


class Settings(_SettingsModel):
    """Complete user settings as written in TOML."""

    format_order: list[str] = Field(default_factory=list, alias="formatOrder")
    on_save: OnSaveSettings = Field(default_factory=OnSaveSettings, alias="onSave")
    error_handling: ErrorHandling = Field(default=ErrorHandling.TRANSIENT, alias="errorHandling")
    busy_signal: bool = Field(default=True, alias="busySignal")
    status_bar: bool = Field(default=True, alias="statusBar")
    formatters: dict[str, FormatterSettings] = Field(default_factory=dict)

    def flatten(self, profiles: Mapping[str, FormatterProfile] = FORMATTER_PROFILES) -> dict[str, SettingValue]:
        """Return dotted settings keys with their values.

        Args:
            profiles: Registered formatter profiles supplying default local
                binaries and configuration names.

        Returns:
            dict[str, SettingValue]: Mapping suitable for :class:`SettingsStore`.

        Raises:
            ConfigError: If a formatter section names an unknown formatter.
        """

        unknown = sorted(set(self.formatters) - set(profiles))
        if unknown:
            raise ConfigError(f"Unknown formatter section(s): {', '.join(unknown)}")
        values: dict[str, SettingValue] = {
            FORMAT_ORDER_KEY: tuple(self.format_order),
            ON_SAVE_ENABLED_KEY: self.on_save.enabled,
            SAVE_ORDER_KEY: tuple(self.on_save.save_order),
            ERROR_HANDLING_KEY: self.error_handling.value,
            BUSY_SIGNAL_KEY: self.busy_signal,
            STATUS_BAR_KEY: self.status_bar,
        }
        for name, profile in profiles.items():
            section = self.formatters.get(name, FormatterSettings())
            local_bins = profile.local_bins if section.local.bins is None else section.local.bins
            local_configs = profile.local_configs if section.local.configs is None else section.local.configs
            values[formatter_key(name, LOCAL_BINS)] = tuple(local_bins)
            values[formatter_key(name, LOCAL_CMD_ARGS)] = tuple(section.local.cmd_args)
            values[formatter_key(name, LOCAL_CONFIGS)] = tuple(local_configs)
            values[formatter_key(name, GLOBAL_BIN_PATH)] = section.global_.bin_path
            values[formatter_key(name, GLOBAL_CMD_ARGS)] = tuple(section.global_.cmd_args)
            values[formatter_key(name, GLOBAL_CONFIGS)] = tuple(section.global_.configs)
        return values


def _normalise_value(value: SettingValue) -> SettingValue:
    if isinstance(value, (str, bool)) or value is None:
        return value
    return tuple(str(item) for item in value)


class SettingsStore:
    """In-memory settings store notifying observers on change."""

    def __init__(self, values: Mapping[str, SettingValue] | None = None) -> None:
        self._values: dict[str, SettingValue] = {
            key: _normalise_value(value) for key, value in (values or {}).items()
        }
        self._emitters: dict[str, Emitter[SettingValue]] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        profiles: Mapping[str, FormatterProfile] = FORMATTER_PROFILES,
    ) -> SettingsStore:
        """Build a store holding ``settings`` (defaults when omitted)."""

        return cls((settings or Settings()).flatten(profiles))

    def keys(self) -> tuple[str, ...]:
        """Return the known settings keys."""

        return tuple(self._values)

    def get(self, key: str) -> SettingValue:
        """Return the value of ``key``.

        Raises:
            KeyError: If ``key`` is not a known setting.
        """

        return self._values[key]

    def observe(self, key: str, callback: SettingCallback) -> CallbackSubscription:
        """Invoke ``callback`` with the value of ``key`` now and after every change."""

        value = self.get(key)
        subscription = self._emitters.setdefault(key, Emitter()).subscribe(callback)
        callback(value)
        return subscription

    def set(self, key: str, value: SettingValue) -> None:
        """Store ``value`` under ``key`` and notify observers when it changed."""

        if key not in self._values:
            raise KeyError(key)
        normalised = _normalise_value(value)
        if self._values[key] == normalised:
            return
        self._values[key] = normalised
        LOGGER.debug("setting %s changed", key)
        emitter = self._emitters.get(key)
        if emitter is not None:
            emitter.emit(normalised)

    def update(self, values: Mapping[str, SettingValue]) -> None:
        """Apply several changes in insertion order."""

        for key, value in values.items():
            self.set(key, value)

    def toggle(self, key: str) -> bool:
        """Flip the boolean setting ``key`` and return the new value."""

        toggled = not bool(self.get(key))
        self.set(key, toggled)
        return toggled


def compact(values: Iterable[str] | None) -> tuple[str, ...]:
    """Return ``values`` without empty entries, preserving order."""

    return tuple(value for value in (values or ()) if value)


def as_strings(value: SettingValue) -> Sequence[str] | None:
    """Return a list-valued setting as a sequence of strings.

    A single string becomes a one-element sequence; booleans and ``None``
    yield ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


def _pyproject_section(data: Mapping[str, Any]) -> Mapping[str, Any] | None:
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return None
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    return section if isinstance(section, Mapping) else None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_settings(path: Path) -> Settings:
    """Load settings from a standalone TOML file or a ``pyproject.toml``.

    Args:
        path: ``formatters-python.toml`` or ``pyproject.toml`` to read. For
            ``pyproject.toml`` only the ``[tool.formatters-python]`` table is used.

    Returns:
        Settings: Validated settings model.

    Raises:
        ConfigError: If the file is unreadable, not TOML, or fails validation.
    """

    data: Mapping[str, Any] | None = _read_toml(path)
    if path.name == PYPROJECT_FILE_NAME:
        data = _pyproject_section(data or {})
    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path}: {exc}") from exc


def discover_settings_file(start: Path) -> Path | None:
    """Return the closest settings file at or above ``start``.

    A ``formatters-python.toml`` wins over a ``pyproject.toml`` in the same
    directory; a ``pyproject.toml`` only counts when it carries the
    ``[tool.formatters-python]`` table.
    """

    resolved = start.resolve()
    for directory in (resolved, *resolved.parents):
        candidate = directory / SETTINGS_FILE_NAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            try:
                section = _pyproject_section(_read_toml(pyproject))
            except ConfigError as exc:
                LOGGER.warning("skipping %s: %s", pyproject, exc)
                continue
            if section is not None:
                return pyproject
    return None


__all__ = [
    "BUSY_SIGNAL_KEY",
    "ConfigError",
    "ERROR_HANDLING_KEY",
    "ErrorHandling",
    "FORMAT_ORDER_KEY",
    "FormatterSettings",
    "GLOBAL_BIN_PATH",
    "GLOBAL_CMD_ARGS",
    "GLOBAL_CONFIGS",
    "GlobalSettings",
    "LOCAL_BINS",
    "LOCAL_CMD_ARGS",
    "LOCAL_CONFIGS",
    "LocalSettings",
    "ON_SAVE_ENABLED_KEY",
    "OnSaveSettings",
    "SAVE_ORDER_KEY",
    "STATUS_BAR_KEY",
    "Settings",
    "SettingsStore",
    "as_strings",
    "compact",
    "discover_settings_file",
    "formatter_key",
    "load_settings",
]
