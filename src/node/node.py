"""Telegram node: maps each input record onto one Bot API call."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.models import ApiRequest, ExecutionRecord, NodeItem
from src.node.mapper import build_request
from src.node.parameters import resolve_parameters
from src.schema.loader import load_description
from src.schema.models import NodeDescription
from src.telegram.client import TelegramApiClient

logger = logging.getLogger(__name__)


class TelegramNode:
    """Executes the Telegram node over a batch of input records.

    Records are processed one after another: each call completes before the
    next record is mapped. The first error aborts the run and propagates
    unchanged, so no output is returned for a failed run.
    """

    def __init__(
        self,
        client: TelegramApiClient,
        description: NodeDescription | None = None,
    ) -> None:
        self.description = description or load_description()
        self._client = client

    def prepare(self, record: ExecutionRecord) -> ApiRequest:
        """Resolve the record's parameters and map them to an API call."""
        parameters = resolve_parameters(self.description, record.parameters)
        return build_request(parameters)

    async def execute(self, records: Sequence[ExecutionRecord]) -> list[NodeItem]:
        items: list[NodeItem] = []
        for index, record in enumerate(records):
            request = self.prepare(record)
            logger.debug("Record %d: %s %s", index, request.method, request.endpoint)
            response = await self._client.request(
                request.method, request.endpoint, request.body, request.qs,
            )
            items.append(NodeItem(json=response))
        logger.info("Telegram node processed %d record(s)", len(items))
        return items
