from __future__ import annotations

from collections.abc import Mapping
import copy
from functools import cached_property
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, KeysView, Sequence, TypedDict, Required, TypeAlias, TypeVar

import platformdirs

from tpager._loop import loop_last


@dataclass
class Setting:
    """A setting or group of setting."""

    key: str
    title: str
    type: str = "object"
    help: str = ""
    default: object | None = None
    validate: list[dict] | None = None
    children: dict[str, Setting] | None = None


class SchemaDict(TypedDict, total=False):
    """Typing for schema data structure."""

    key: Required[str]
    title: Required[str]
    type: Required[str]
    help: str
    default: object
    fields: list[SchemaDict]
    validate: list[dict]


SettingsType: TypeAlias = dict[str, object]

ExpectType = TypeVar("ExpectType")


class SettingsError(Exception):
    """Base class for settings related errors."""


class InvalidKey(SettingsError):
    """The key is not in the schema."""


class InvalidValue(SettingsError):
    """The value was not of the expected type."""


def parse_key(key: str) -> Sequence[str]:
    return key.split(".")


def default_settings_path() -> Path:
    """The settings file in the user's config directory."""
    return Path(platformdirs.user_config_dir("tpager")) / "settings.json"


def load_settings(path: Path) -> SettingsType:
    """Load settings from a JSON file.

    Args:
        path: Path to settings file.

    Raises:
        SettingsError: If the file can't be read, or doesn't contain a JSON object.

    Returns:
        Settings data, or an empty dict if the file doesn't exist.
    """
    if not path.exists():
        return {}
    try:
        settings = json.loads(path.read_text("utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        raise SettingsError(f"Unable to read settings from {str(path)!r}; {error}")
    if not isinstance(settings, dict):
        raise SettingsError(f"Settings in {str(path)!r} should be a JSON object")
    return settings


class Schema:
    def __init__(self, schema: list[SchemaDict]) -> None:
        self.schema = schema

    def get_default(self, key: str) -> object | None:
        """Get a default for the given key.

        Args:
            key: Key in dotted notation

        Returns:
            Default, or `None`.
        """
        defaults = self.defaults

        schema_object = defaults
        for last, sub_key in loop_last(parse_key(key)):
            if last:
                return schema_object.get(sub_key, None)
            else:
                if isinstance(schema_object, dict):
                    schema_object = schema_object.get(sub_key, {})
                else:
                    return None
        return None

    @cached_property
    def defaults(self) -> dict[str, object]:
        settings: dict[str, object] = {}

        def set_defaults(schema: list[SchemaDict], settings: dict[str, object]) -> None:
            sub_settings: SettingsType
            for sub_schema in schema:
                key = sub_schema["key"]
                assert isinstance(sub_schema, dict)
                type = sub_schema["type"]

                if type == "object":
                    if fields := sub_schema.get("fields"):
                        sub_settings = settings[key] = {}
                        set_defaults(fields, sub_settings)

                else:
                    if (default := sub_schema.get("default")) is not None:
                        settings[key] = default

        set_defaults(self.schema, settings)
        return settings

    @cached_property
    def key_to_type(self) -> Mapping[str, type]:
        TYPE_MAP = {
            "object": SchemaDict,
            "integer": int,
        }

        def get_keys(setting: Setting) -> Iterable[tuple[str, type]]:
            if setting.type == "object" and setting.children:
                for child in setting.children.values():
                    yield from get_keys(child)
            else:
                yield (setting.key, TYPE_MAP[setting.type])

        keys = {
            key: value_type
            for setting in self.settings_map.values()
            for key, value_type in get_keys(setting)
        }
        return keys

    @property
    def keys(self) -> KeysView:
        return self.key_to_type.keys()

    @cached_property
    def settings_map(self) -> dict[str, Setting]:
        form_settings: dict[str, Setting] = {}

        def build_settings(
            name: str, schema: SchemaDict, default: object = None
        ) -> Setting:
            schema_type = schema.get("type")
            assert schema_type is not None
            if schema_type == "object":
                return Setting(
                    name,
                    schema["title"],
                    schema_type,
                    help=schema.get("help") or "",
                    default=schema.get("default", default),
                    validate=schema.get("validate"),
                    children={
                        schema["key"]: build_settings(f"{name}.{schema['key']}", schema)
                        for schema in schema.get("fields", [])
                    },
                )
            else:
                return Setting(
                    name,
                    schema["title"],
                    schema_type,
                    help=schema.get("help") or "",
                    default=schema.get("default", default),
                    validate=schema.get("validate"),
                )

        for sub_schema in self.schema:
            form_settings[sub_schema["key"]] = build_settings(
                sub_schema["key"], sub_schema
            )
        return form_settings

    def get_setting(self, key: str) -> Setting:
        """Get the setting for a dotted key.

        Raises:
            InvalidKey: If the key isn't in the schema.
        """
        settings_map = self.settings_map
        setting: Setting | None = None
        for sub_key in parse_key(key):
            if settings_map is None or (setting := settings_map.get(sub_key)) is None:
                raise InvalidKey(f"No setting called {key!r}")
            settings_map = setting.children
        assert setting is not None
        return setting

    def validate(self, key: str, value: object) -> None:
        """Check a value against the schema.

        Args:
            key: Key in dotted notation.
            value: Proposed value.

        Raises:
            InvalidKey: If the key isn't in the schema.
            InvalidValue: If the value is the wrong type or fails validation.
        """
        if key not in self.key_to_type:
            raise InvalidKey(f"No setting called {key!r}")
        expect_type = self.key_to_type[key]
        # bool is a subclass of int, but True is not a tab width
        if not isinstance(value, expect_type) or isinstance(value, bool):
            raise InvalidValue(
                f"Setting {key!r} expected {expect_type.__name__} type; found {value!r}"
            )
        for rule in self.get_setting(key).validate or []:
            if rule.get("type") == "minimum" and value < rule["value"]:
                raise InvalidValue(
                    f"Setting {key!r} should be at least {rule['value']}; found {value!r}"
                )


class Settings:
    """Stores schema backed settings."""

    def __init__(
        self,
        schema: Schema,
        settings: dict[str, object],
    ) -> None:
        self._schema = schema
        self._settings = settings

    @property
    def schema(self) -> Schema:
        return self._schema

    def get(
        self,
        key: str,
        expect_type: type[ExpectType] = object,
    ) -> ExpectType:
        """Get a setting value, falling back to the schema default.

        Args:
            key: Key in dot notation.
            expect_type: The expected type of the value.

        Raises:
            InvalidValue: If the stored value is not valid.

        Returns:
            The setting value.
        """
        sub_settings = self._settings

        for last, sub_key in loop_last(parse_key(key)):
            if last:
                if (value := sub_settings.get(sub_key)) is None:
                    default = self._schema.get_default(key)
                    if default is None:
                        default = expect_type()
                    if not isinstance(default, expect_type):
                        default = expect_type(default)
                    assert isinstance(default, expect_type)
                    return default

                if key in self._schema.key_to_type:
                    self._schema.validate(key, value)
                if not isinstance(value, expect_type):
                    raise InvalidValue(
                        f"key {sub_key!r} is not of expected type {expect_type.__name__}"
                    )
                return value
            if not isinstance((sub_settings := sub_settings.get(sub_key, {})), dict):
                default = self._schema.get_default(key)
                if default is None:
                    default = expect_type()
                if not isinstance(default, expect_type):
                    default = expect_type(default)
                assert isinstance(default, expect_type)
                return default
        assert False, "Can't get here"

    def set(self, key: str, value: object) -> None:
        """Set a setting value.

        Args:
            key: Key in dot notation.
            value: New value.

        Raises:
            InvalidKey: If the key isn't in the schema.
            InvalidValue: If the value is not valid.
        """
        self._schema.validate(key, value)
        updated_settings = copy.deepcopy(self._settings)

        setting = updated_settings
        for last, sub_key in loop_last(parse_key(key)):
            if last:
                setting[sub_key] = value
            else:
                setting_node = setting.setdefault(sub_key, {})
                if isinstance(setting_node, dict):
                    setting = setting_node
                else:
                    setting[sub_key] = {}
                    setting = setting[sub_key]
        self._settings = updated_settings
