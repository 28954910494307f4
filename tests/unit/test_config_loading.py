"""Tests for the node description config file."""

from __future__ import annotations

import json
import tomllib
from pathlib import Path

from src.schema import loader

SCHEMA_DIR = Path(__file__).parent.parent.parent / "src" / "schema"


def _load() -> dict:
    return json.loads((SCHEMA_DIR / "telegram-node.json").read_text())


def test_description_is_valid_json() -> None:
    config = _load()
    assert config["name"] == "telegram"
    assert isinstance(config["properties"], list)


def test_requires_telegram_credentials() -> None:
    assert _load()["credentials"] == [{"name": "telegramApi", "required": True}]


def test_resources_declared() -> None:
    resource = next(p for p in _load()["properties"] if p["name"] == "resource")
    assert [o["value"] for o in resource["options"]] == ["chat", "callback", "message"]
    assert resource["default"] == "message"


def test_every_property_has_required_fields() -> None:
    for prop in _load()["properties"]:
        assert "displayName" in prop
        assert "name" in prop
        assert "type" in prop
        assert "default" in prop


def test_option_defaults_are_valid_choices() -> None:
    for prop in _load()["properties"]:
        if prop["type"] == "options":
            assert prop["default"] in [o["value"] for o in prop["options"]], prop["name"]


def test_description_ships_inside_package() -> None:
    assert loader.DEFAULT_SCHEMA_PATH.parent == Path(loader.__file__).resolve().parent
    assert loader.DEFAULT_SCHEMA_PATH.is_file()
    pyproject = tomllib.loads((SCHEMA_DIR.parent.parent / "pyproject.toml").read_text())
    package_data = pyproject["tool"]["setuptools"]["package-data"]
    assert "*.json" in package_data["src.schema"]
