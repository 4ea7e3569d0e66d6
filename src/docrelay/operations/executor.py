"""Batch executor.

Runs an ordered list of actions one after another against the remote API. Batches are best
effort and fully observable: a failing action is recorded and the next one still runs.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from typing import Any

from docrelay.config import Settings
from docrelay.logging import batch_context, get_logger, set_action
from docrelay.models.actions import AppendAction, DeleteAction, parse_action
from docrelay.models.report import ErrorEntry, ExecutionReport
from docrelay.operations.append import AppendOperation
from docrelay.operations.delete import DeleteOperation
from docrelay.remote.protocol import RemoteDocumentClient

logger = get_logger(__name__)

UNKNOWN_ACTION_ERROR = "Unknown or incomplete action"


class BatchExecutor:
    """Execute delete/append actions sequentially and aggregate their entries."""

    def __init__(
        self,
        client: RemoteDocumentClient,
        *,
        container_id: str,
        max_payload: int,
        report_unknown_actions: bool = False,
    ) -> None:
        """Initialize the executor.

        Args:
            client: Remote document client.
            container_id: Container every append writes under.
            max_payload: Character budget per remote write.
            report_unknown_actions: Emit an error entry for unrecognized actions instead of
                skipping them silently.
        """
        self._delete = DeleteOperation(client)
        self._append = AppendOperation(client, container_id=container_id, max_payload=max_payload)
        self._report_unknown_actions = report_unknown_actions

    @classmethod
    def from_settings(cls, client: RemoteDocumentClient, settings: Settings) -> BatchExecutor:
        return cls(
            client,
            container_id=settings.page_id,
            max_payload=settings.max_payload,
            report_unknown_actions=settings.report_unknown_actions,
        )

    async def execute(self, actions: Iterable[Any]) -> ExecutionReport:
        """Run every action in submission order.

        Args:
            actions: Raw actions, e.g. ``{"op": "delete", "id": "..."}``.

        Returns:
            The report. Never raises for individual action failures.
        """

        report = ExecutionReport()
        batch_id = uuid.uuid4().hex[:12]
        with batch_context(batch_id=batch_id):
            for index, raw in enumerate(actions):
                action = parse_action(raw)
                if action is None:
                    self._skip(index, raw, report)
                    continue

                set_action(f"{index}:{action.op}")
                if isinstance(action, DeleteAction):
                    report.record(await self._delete.run(action.id))
                elif isinstance(action, AppendAction):
                    report.extend(await self._append.run(action.block))

            logger.info(
                "Batch finished",
                extra={"executed": len(report.executed), "errors": len(report.errors)},
            )
        return report

    def _skip(self, index: int, raw: Any, report: ExecutionReport) -> None:
        op = raw.get("op") if isinstance(raw, Mapping) else None
        logger.warning("Skipping unrecognized action", extra={"index": index, "op": op})
        if self._report_unknown_actions:
            report.record(
                ErrorEntry(op=op if isinstance(op, str) and op else "unknown", error=UNKNOWN_ACTION_ERROR)
            )
