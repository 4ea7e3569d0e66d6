"""Single-action and batch entry points shared by the HTTP API and the CLI.

The single-action paths reuse the same operations as the batch path, so id validation,
archive idempotency and text extraction behave identically everywhere.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from docrelay.config import Settings
from docrelay.logging import get_logger
from docrelay.models.blocks import ContentBlock
from docrelay.models.report import ErrorEntry, ExecutionReport
from docrelay.operations.append import AppendOperation
from docrelay.operations.delete import DeleteOperation
from docrelay.operations.executor import BatchExecutor
from docrelay.remote.protocol import RemoteDocumentClient
from docrelay.utils.ids import is_valid_node_id

logger = get_logger(__name__)

# Status used when a failure has no remote status (transport failure).
BAD_GATEWAY = 502


@dataclass(frozen=True)
class ServiceResponse:
    """Status code and JSON body for a caller."""

    status: int
    body: Any


def _payload_length(node: Mapping[str, Any]) -> int:
    return len(json.dumps({"children": [node]}, ensure_ascii=False, separators=(",", ":")))


class DocumentService:
    """Facade over the operations for one configured container."""

    def __init__(self, client: RemoteDocumentClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings
        self._delete = DeleteOperation(client)
        self._append = AppendOperation(
            client, container_id=settings.page_id, max_payload=settings.max_payload
        )
        self._executor = BatchExecutor.from_settings(client, settings)

    async def read(self) -> ServiceResponse:
        """Return the container's children with the remote status."""

        resp = await self._client.list_children(
            self._settings.page_id, page_size=self._settings.read_page_size
        )
        return ServiceResponse(status=resp.status, body=resp.body)

    async def append_one(
        self, *, block: str | Mapping[str, Any] | None = None, text: str | None = None
    ) -> ServiceResponse:
        """Append a single block without splitting.

        Oversized payloads are rejected with 400; the batch path is the one that splits.
        """

        content = ContentBlock.from_payload(block) if block else ContentBlock.plain(text or "")
        length = _payload_length(content.to_node())
        if length > self._settings.max_payload:
            logger.info("Rejected oversized append", extra={"length": length})
            return ServiceResponse(
                status=400,
                body={"error": "Payload too large for /append", "length": length},
            )

        report = ExecutionReport()
        report.extend(await self._append.run(content))
        return ServiceResponse(status=_report_status(report), body=report.to_payload())

    async def delete_one(self, raw_id: str | None) -> ServiceResponse:
        """Archive a single node with the same idempotency rules as the batch path."""

        if not raw_id:
            return ServiceResponse(status=400, body={"error": "Missing block ID"})
        if not is_valid_node_id(raw_id):
            return ServiceResponse(
                status=400,
                body={"error": "Invalid Notion block ID format.", "provided": raw_id},
            )

        entry = await self._delete.run(raw_id)
        body = entry.model_dump(mode="json", exclude_none=True)
        if isinstance(entry, ErrorEntry):
            return ServiceResponse(status=entry.status or BAD_GATEWAY, body=body)
        return ServiceResponse(status=200, body=body)

    async def execute(self, actions: Iterable[Any]) -> ServiceResponse:
        """Run a batch. Always 200; per-action failures live in the report."""

        report = await self._executor.execute(actions)
        return ServiceResponse(status=200, body=report.to_payload())


def _report_status(report: ExecutionReport) -> int:
    if report.errors:
        return report.errors[0].status or BAD_GATEWAY
    if report.executed and report.executed[0].status:
        return report.executed[0].status
    return 200
