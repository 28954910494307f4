"""Tests for node description loading and the schema models."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.schema.loader import (
    DEFAULT_SCHEMA_PATH,
    SchemaConfigError,
    load_description,
    load_description_from_config,
    load_description_from_file,
)
from src.schema.models import (
    NodeDescription,
    NodeProperty,
    PropertyGroup,
    PropertyOption,
    PropertyType,
)

_MINIMAL = {
    "displayName": "Mini",
    "name": "mini",
    "version": 1,
    "description": "test",
    "properties": [
        {
            "displayName": "Resource",
            "name": "resource",
            "type": "options",
            "options": [{"name": "Chat", "value": "chat"}],
            "default": "chat",
        },
    ],
}


def test_loads_default_description() -> None:
    description = load_description_from_file(DEFAULT_SCHEMA_PATH)
    assert description.display_name == "Telegram"
    assert description.credentials[0].name == "telegramApi"


def test_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "node.json"
    path.write_text(json.dumps(_MINIMAL))
    monkeypatch.setenv("TELEGRAM_NODE_SCHEMA_PATH", str(path))
    assert load_description().name == "mini"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(SchemaConfigError, match="not found"):
        load_description_from_file(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "node.json"
    path.write_text("{not json")
    with pytest.raises(SchemaConfigError, match="not valid JSON"):
        load_description_from_file(path)


def test_missing_config_raises() -> None:
    with pytest.raises(SchemaConfigError, match="missing"):
        load_description_from_config(None)


def test_unknown_property_key_rejected() -> None:
    config = json.loads(json.dumps(_MINIMAL))
    config["properties"][0]["colour"] = "blue"
    with pytest.raises(SchemaConfigError, match="Invalid node description"):
        load_description_from_config(config)


def test_unknown_property_type_rejected() -> None:
    config = json.loads(json.dumps(_MINIMAL))
    config["properties"][0]["type"] = "dateTime"
    with pytest.raises(SchemaConfigError):
        load_description_from_config(config)


class TestOptionEntries:
    def test_options_property_holds_choices(self, description: NodeDescription) -> None:
        resource = description.properties_named("resource")[0]
        assert all(isinstance(o, PropertyOption) for o in resource.options or [])
        assert resource.choices() == ["chat", "callback", "message"]

    def test_collection_holds_fields(self, description: NodeDescription) -> None:
        prop = description.properties_named("forceReply")[0]
        assert prop.type == PropertyType.COLLECTION
        assert [f.name for f in prop.fields()] == ["force_reply", "selective"]
        assert all(isinstance(f, NodeProperty) for f in prop.fields())

    def test_fixed_collection_holds_groups(self, description: NodeDescription) -> None:
        prop = description.properties_named("inlineKeyboard")[0]
        assert prop.type == PropertyType.FIXED_COLLECTION
        assert prop.type_options is not None and prop.type_options.multiple_values
        (rows,) = prop.groups()
        assert isinstance(rows, PropertyGroup)
        (row,) = rows.values
        (buttons,) = row.groups()
        assert [v.name for v in buttons.values] == ["text", "additionalFields"]

    def test_number_bounds_loaded(self, description: NodeDescription) -> None:
        prop = description.properties_named("additionalFields")[0]
        cache_time = next(f for f in prop.fields() if f.name == "cache_time")
        assert cache_time.type_options is not None
        assert cache_time.type_options.min_value == 0


def test_dump_uses_camel_case(description: NodeDescription) -> None:
    data = json.loads(description.model_dump_json(by_alias=True, exclude_none=True))
    assert data["displayName"] == "Telegram"
    assert "displayOptions" in data["properties"][1]
    reloaded = NodeDescription.model_validate(data)
    assert reloaded == description
