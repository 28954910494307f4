"""Loading of the node description from JSON configuration."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from src.schema.models import NodeDescription

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "telegram-node.json"


class SchemaConfigError(Exception):
    pass


def load_description_from_config(config: dict[str, object] | None) -> NodeDescription:
    """Validate a parsed description. Fail-closed on missing config."""
    if config is None:
        raise SchemaConfigError("Node description config is missing")
    try:
        return NodeDescription.model_validate(config)
    except ValidationError as exc:
        raise SchemaConfigError(f"Invalid node description: {exc}") from exc


def load_description_from_file(schema_path: str | Path) -> NodeDescription:
    path = Path(schema_path)
    if not path.exists():
        raise SchemaConfigError(f"Node description file not found: {schema_path}")
    try:
        config = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise SchemaConfigError(f"Node description is not valid JSON: {schema_path}") from exc
    description = load_description_from_config(config)
    logger.debug(
        "Loaded node description %s v%d (%d properties) from %s",
        description.name, description.version, len(description.properties), path,
    )
    return description


def load_description() -> NodeDescription:
    """Load the Telegram description, honouring ``TELEGRAM_NODE_SCHEMA_PATH``."""
    return load_description_from_file(
        os.environ.get("TELEGRAM_NODE_SCHEMA_PATH", str(DEFAULT_SCHEMA_PATH)),
    )
