"""Split-aware append workflow."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from docrelay.logging import get_logger, log_exception
from docrelay.models.blocks import ContentBlock, paragraph_node
from docrelay.models.report import Entry, ErrorEntry, ResultEntry
from docrelay.remote.protocol import AppendResult, RemoteDocumentClient
from docrelay.utils.text import PREVIEW_CHARS, TextChunk, split_text

logger = get_logger(__name__)


def _response_text(result: AppendResult) -> str | None:
    if result.body is None:
        return None
    if isinstance(result.body, Mapping):
        message = result.body.get("message")
        if isinstance(message, str):
            return message
    return str(result.body)


class AppendOperation:
    """Append a block under the container, splitting oversized text.

    Text longer than `max_payload` characters is written as one paragraph per chunk, in order.
    A failed chunk does not roll back the chunks already written; each chunk gets its own
    entry so the caller can see exactly what landed.
    """

    def __init__(
        self,
        client: RemoteDocumentClient,
        *,
        container_id: str,
        max_payload: int,
    ) -> None:
        self._client = client
        self._container_id = container_id
        self._max_payload = max_payload

    async def run(self, payload: str | Mapping[str, Any] | ContentBlock) -> list[Entry]:
        """Append one logical block.

        Returns:
            At least one entry, one per remote write. Never raises.
        """

        try:
            block = payload if isinstance(payload, ContentBlock) else ContentBlock.from_payload(payload)
            chunks = split_text(block.text, self._max_payload)
        except Exception as e:
            log_exception(logger, "Append failed before any remote write")
            return [ErrorEntry(op="append", error=str(e) or type(e).__name__)]

        if len(chunks) == 1:
            return [await self._append_whole(block)]

        logger.info(
            "Splitting oversized block",
            extra={"text_len": len(block.text), "chunk_count": len(chunks), "max_payload": self._max_payload},
        )
        entries: list[Entry] = []
        for chunk in chunks:
            entries.append(await self._append_chunk(chunk))
        return entries

    async def _append_whole(self, block: ContentBlock) -> Entry:
        text = block.display_text[:PREVIEW_CHARS]
        try:
            result = await self._client.append_children(self._container_id, [block.to_node()])
        except Exception as e:
            log_exception(logger, "Append failed", text_len=len(block.text))
            return ErrorEntry(op="append", text=text, error=str(e) or type(e).__name__)

        if result.ok:
            return ResultEntry(op="append", text=text, id=result.created_id, status=result.status)
        logger.warning("Append rejected", extra={"status_code": result.status})
        return ErrorEntry(op="append", text=text, status=result.status, response=_response_text(result))

    async def _append_chunk(self, chunk: TextChunk) -> Entry:
        text = f"{chunk.preview}..."
        try:
            result = await self._client.append_children(
                self._container_id, [paragraph_node(chunk.content)]
            )
        except Exception as e:
            log_exception(logger, "Append chunk failed", preview=chunk.preview)
            return ErrorEntry(op="append", text=text, error=str(e) or type(e).__name__)

        if result.ok:
            return ResultEntry(op="append", text=text, id=result.created_id, status=result.status)
        logger.warning("Append chunk rejected", extra={"status_code": result.status})
        return ErrorEntry(op="append", text=text, status=result.status, response=_response_text(result))
