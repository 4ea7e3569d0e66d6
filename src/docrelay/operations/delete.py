"""Idempotent delete workflow."""

from __future__ import annotations

from docrelay.errors import (
    InvalidIdFormat,
    RemoteConflict,
    RemoteError,
    RemoteNotFound,
    RemoteRejected,
)
from docrelay.logging import get_logger, log_exception
from docrelay.models.report import Entry, ErrorEntry, ResultEntry
from docrelay.remote.protocol import ArchiveResult, RemoteDocumentClient
from docrelay.utils.ids import normalize_node_id

logger = get_logger(__name__)

INVALID_ID_ERROR = "Invalid Notion block ID format"
NOT_FOUND_NOTE = "Block already deleted or not found"
ALREADY_ARCHIVED_NOTE = "Block was already archived, skipped"


def classify_archive_failure(client: RemoteDocumentClient, result: ArchiveResult) -> RemoteError:
    """Map a failed archive call onto the error taxonomy."""

    if client.is_already_archived(result):
        return RemoteConflict(result.status, result.body_text)
    if result.status == 404:
        return RemoteNotFound(result.status, result.body_text)
    return RemoteRejected(result.status, result.body_text)


class DeleteOperation:
    """Archive a node, treating "already gone" outcomes as success."""

    def __init__(self, client: RemoteDocumentClient) -> None:
        self._client = client

    async def run(self, raw_id: str) -> Entry:
        """Delete one node.

        Args:
            raw_id: Node id as supplied by the caller (hyphens allowed).

        Returns:
            A single result or error entry. Never raises.
        """

        try:
            try:
                node_id = normalize_node_id(raw_id)
            except InvalidIdFormat:
                logger.info("Rejected malformed block id", extra={"raw_id": raw_id})
                return ErrorEntry(op="delete", id=raw_id, error=INVALID_ID_ERROR)

            lookup = await self._client.fetch_node(node_id)
            if self._client.is_not_found(lookup):
                return ResultEntry(op="delete", id=node_id, note=NOT_FOUND_NOTE)

            result = await self._client.archive_node(node_id)
            if result.ok:
                logger.info("Block archived", extra={"block_id": node_id, "status_code": result.status})
                return ResultEntry(op="delete", id=node_id, status=result.status)

            failure = classify_archive_failure(self._client, result)
            if isinstance(failure, RemoteConflict):
                return ResultEntry(op="delete", id=node_id, note=ALREADY_ARCHIVED_NOTE)
            # Removed between the existence check and the archive call.
            if isinstance(failure, RemoteNotFound):
                return ResultEntry(op="delete", id=node_id, note=NOT_FOUND_NOTE)

            logger.warning(
                "Archive rejected",
                extra={"block_id": node_id, "status_code": failure.status},
            )
            return ErrorEntry(
                op="delete",
                id=node_id,
                status=failure.status,
                response=failure.body,
            )
        except Exception as e:
            log_exception(logger, "Delete failed", raw_id=raw_id)
            return ErrorEntry(op="delete", id=str(raw_id), error=str(e) or type(e).__name__)
