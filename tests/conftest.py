"""Shared test fixtures for the Telegram node."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.models import ExecutionRecord
from src.node.parameters import NodeParameters, resolve_parameters
from src.schema.loader import load_description_from_file
from src.schema.models import NodeDescription
from src.telegram.client import TelegramApiClient

SCHEMA_DIR = Path(__file__).parent.parent / "src" / "schema"


@pytest.fixture(scope="session")
def description() -> NodeDescription:
    return load_description_from_file(SCHEMA_DIR / "telegram-node.json")


@pytest.fixture
def mock_client() -> MagicMock:
    """TelegramApiClient stand-in answering every call with ``{"ok": true}``."""
    client = MagicMock(spec=TelegramApiClient)
    client.request = AsyncMock(return_value={"ok": True, "result": {}})
    return client


@pytest.fixture
def resolve(description: NodeDescription):
    """Resolve raw parameter values the way the node does for one record."""

    def _resolve(**raw: Any) -> NodeParameters:
        return resolve_parameters(description, raw)

    return _resolve


# --- Factory functions for test data ---


def make_record(**parameters: Any) -> ExecutionRecord:
    """Factory for ExecutionRecord; keyword arguments become parameters."""
    return ExecutionRecord(parameters=parameters)


def make_inline_keyboard(*rows: list[dict[str, Any]]) -> dict[str, Any]:
    """Build the form's ``rows[].row.buttons[]`` shape from button rows."""
    return {"rows": [{"row": {"buttons": list(buttons)}} for buttons in rows]}
