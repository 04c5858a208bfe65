from __future__ import annotations

import json
from pathlib import Path

import pytest

from tpager.settings import (
    InvalidKey,
    InvalidValue,
    Schema,
    Settings,
    SettingsError,
    load_settings,
)
from tpager.settings_schema import SCHEMA


def make_settings(data: dict[str, object] | None = None) -> Settings:
    return Settings(Schema(SCHEMA), {} if data is None else data)


def test_schema_defaults() -> None:
    schema = Schema(SCHEMA)
    assert schema.defaults == {"pager": {"tab-width": 8}}
    assert schema.get_default("pager.tab-width") == 8
    assert schema.get_default("pager.missing") is None


def test_schema_keys() -> None:
    schema = Schema(SCHEMA)
    assert list(schema.keys) == ["pager.tab-width"]
    assert schema.get_setting("pager.tab-width").title == "Tab width"


def test_schema_key_types() -> None:
    assert dict(Schema(SCHEMA).key_to_type) == {"pager.tab-width": int}


def test_unsupported_setting_type() -> None:
    schema = Schema([{"key": "wrap", "title": "Wrap", "type": "boolean"}])
    with pytest.raises(KeyError):
        schema.key_to_type


def test_unknown_setting() -> None:
    with pytest.raises(InvalidKey):
        Schema(SCHEMA).get_setting("pager.colour")


def test_get_default() -> None:
    assert make_settings().get("pager.tab-width", int) == 8


def test_get_stored_value() -> None:
    settings = make_settings({"pager": {"tab-width": 4}})
    assert settings.get("pager.tab-width", int) == 4


def test_get_invalid_stored_value() -> None:
    settings = make_settings({"pager": {"tab-width": "wide"}})
    with pytest.raises(InvalidValue):
        settings.get("pager.tab-width", int)


def test_get_with_non_object_group_uses_default() -> None:
    settings = make_settings({"pager": 3})
    assert settings.get("pager.tab-width", int) == 8


def test_set() -> None:
    data: dict[str, object] = {}
    settings = make_settings(data)
    settings.set("pager.tab-width", 2)
    assert settings.get("pager.tab-width", int) == 2
    assert data == {}


@pytest.mark.parametrize("value", [0, -1, True, "4", 4.0])
def test_set_rejects_invalid_values(value: object) -> None:
    settings = make_settings()
    with pytest.raises(InvalidValue):
        settings.set("pager.tab-width", value)
    assert settings.get("pager.tab-width", int) == 8


def test_set_rejects_unknown_key() -> None:
    with pytest.raises(InvalidKey):
        make_settings().set("pager.search", True)


def test_load_missing_file(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "settings.json") == {}


def test_load_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"pager": {"tab-width": 3}}), "utf-8")
    assert load_settings(path) == {"pager": {"tab-width": 3}}


@pytest.mark.parametrize("text", ["{", "[1, 2]", '"tab"'])
def test_load_invalid_file(tmp_path: Path, text: str) -> None:
    path = tmp_path / "settings.json"
    path.write_text(text, "utf-8")
    with pytest.raises(SettingsError):
        load_settings(path)
