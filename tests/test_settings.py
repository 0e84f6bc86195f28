# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for settings models, loading and the settings store."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from pyformatters.catalog import BLACK, FORMATTER_PROFILES
from pyformatters.settings import (
    ERROR_HANDLING_KEY,
    FORMAT_ORDER_KEY,
    GLOBAL_BIN_PATH,
    LOCAL_BINS,
    LOCAL_CMD_ARGS,
    ON_SAVE_ENABLED_KEY,
    SAVE_ORDER_KEY,
    ConfigError,
    ErrorHandling,
    Settings,
    SettingsStore,
    as_strings,
    compact,
    discover_settings_file,
    formatter_key,
    load_settings,
)


def test_defaults_flatten_with_catalog_candidates() -> None:
    values = Settings().flatten()

    assert values[FORMAT_ORDER_KEY] == ()
    assert values[ON_SAVE_ENABLED_KEY] is False
    assert values[ERROR_HANDLING_KEY] == "transient"
    assert values[formatter_key("black", LOCAL_BINS)] == BLACK.local_bins
    assert values[formatter_key("black", GLOBAL_BIN_PATH)] == ""
    assert {key.split(".", 1)[0] for key in values if key.count(".") == 2} == set(FORMATTER_PROFILES)


def test_unknown_formatter_section_is_rejected() -> None:
    settings = Settings.model_validate({"formatters": {"ruff": {}}})

    with pytest.raises(ConfigError, match="ruff"):
        settings.flatten()


def test_store_observe_calls_immediately_and_on_change() -> None:
    store = SettingsStore.from_settings()
    seen: list[object] = []

    subscription = store.observe(FORMAT_ORDER_KEY, seen.append)
    store.set(FORMAT_ORDER_KEY, ["black"])
    store.set(FORMAT_ORDER_KEY, ("black",))
    subscription.dispose()
    store.set(FORMAT_ORDER_KEY, ["isort"])

    assert seen == [(), ("black",)]
    assert store.get(FORMAT_ORDER_KEY) == ("isort",)


def test_store_rejects_unknown_keys() -> None:
    store = SettingsStore.from_settings()

    with pytest.raises(KeyError):
        store.get("nope")
    with pytest.raises(KeyError):
        store.set("nope", True)


def test_store_toggle_and_update() -> None:
    store = SettingsStore.from_settings()

    assert store.toggle(ON_SAVE_ENABLED_KEY) is True
    store.update({SAVE_ORDER_KEY: ["black"], ON_SAVE_ENABLED_KEY: False})

    assert store.get(SAVE_ORDER_KEY) == ("black",)
    assert store.get(ON_SAVE_ENABLED_KEY) is False


def test_as_strings_and_compact() -> None:
    assert as_strings("black") == ("black",)
    assert as_strings(["a", "b"]) == ("a", "b")
    assert as_strings(None) is None
    assert as_strings(True) is None
    assert compact(["", "a", "", "b"]) == ("a", "b")
    assert compact(None) == ()


def test_load_standalone_settings(tmp_path: Path) -> None:
    path = tmp_path / "formatters-python.toml"
    path.write_text(
        dedent(
            """
            formatOrder = ["isort", "black"]
            errorHandling = "show"
            busySignal = false

            [onSave]
            enabled = true
            saveOrder = ["black"]

            [formatters.black.local]
            bins = ["bin/black"]
            cmdArgs = ["--line-length", "100"]

            [formatters.black.global]
            binPath = "/usr/local/bin/black"
            """,
        ),
        encoding="utf-8",
    )

    settings = load_settings(path)
    values = settings.flatten()

    assert settings.error_handling is ErrorHandling.SHOW
    assert settings.on_save.save_order == ["black"]
    assert values[FORMAT_ORDER_KEY] == ("isort", "black")
    assert values[formatter_key("black", LOCAL_BINS)] == ("bin/black",)
    assert values[formatter_key("black", LOCAL_CMD_ARGS)] == ("--line-length", "100")
    assert values[formatter_key("black", GLOBAL_BIN_PATH)] == "/usr/local/bin/black"
    assert values[formatter_key("isort", LOCAL_BINS)] == FORMATTER_PROFILES["isort"].local_bins


def test_load_pyproject_section(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text(
        dedent(
            """
            [project]
            name = "demo"

            [tool.formatters-python]
            formatOrder = ["black"]
            """,
        ),
        encoding="utf-8",
    )

    assert load_settings(path).format_order == ["black"]


def test_pyproject_without_section_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert load_settings(path) == Settings()


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("formatOrder = [", "Invalid TOML"),
        ('errorHandling = "loud"', "Invalid settings"),
        ('unknownKey = "x"', "Invalid settings"),
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "formatters-python.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_settings(path)


def test_missing_file_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to read"):
        load_settings(tmp_path / "missing.toml")


def test_discover_prefers_standalone_file(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.formatters-python]\n", encoding="utf-8")
    standalone = tmp_path / "formatters-python.toml"
    standalone.write_text("", encoding="utf-8")

    assert discover_settings_file(tmp_path) == standalone.resolve()


def test_discover_skips_pyproject_without_section(tmp_path: Path) -> None:
    outer = tmp_path / "pyproject.toml"
    outer.write_text("[tool.formatters-python]\nformatOrder = []\n", encoding="utf-8")
    inner = tmp_path / "pkg"
    inner.mkdir()
    (inner / "pyproject.toml").write_text('[project]\nname = "pkg"\n', encoding="utf-8")

    assert discover_settings_file(inner) == outer.resolve()
