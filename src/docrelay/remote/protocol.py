"""Protocol definitions for the remote document API."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class NodeLookup:
    """Result of an existence check."""

    found: bool
    status: int
    body: Any = None


@dataclass(frozen=True)
class AppendResult:
    """Result of appending children to a container."""

    ok: bool
    status: int
    body: Any = None

    @property
    def created_id(self) -> str | None:
        """Id of the first created node, if the remote reported one."""

        if not isinstance(self.body, Mapping):
            return None
        results = self.body.get("results")
        if not isinstance(results, list) or not results or not isinstance(results[0], Mapping):
            return None
        return results[0].get("id") or None


@dataclass(frozen=True)
class ArchiveResult:
    """Result of a logical delete."""

    ok: bool
    status: int
    body_text: str = ""


@dataclass(frozen=True)
class RemoteResponse:
    """Raw passthrough response."""

    status: int
    body: Any = None


class RemoteDocumentClient(Protocol):
    """Remote hierarchical-document API.

    Wording-dependent failure detection lives behind `is_not_found` and `is_already_archived`
    so operations do not depend on the remote's exact messages.
    """

    async def fetch_node(self, node_id: str) -> NodeLookup:
        """Look up one node."""

    async def append_children(
        self, container_id: str, nodes: Sequence[Mapping[str, Any]]
    ) -> AppendResult:
        """Append nodes under a container, in order."""

    async def archive_node(self, node_id: str) -> ArchiveResult:
        """Logically delete one node."""

    async def list_children(self, container_id: str, *, page_size: int = 100) -> RemoteResponse:
        """List the first page of a container's children."""

    def is_not_found(self, lookup: NodeLookup) -> bool:
        """Whether a lookup means the node does not exist."""

    def is_already_archived(self, result: ArchiveResult) -> bool:
        """Whether an archive failure means the node was already archived."""
