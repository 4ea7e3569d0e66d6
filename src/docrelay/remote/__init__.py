"""Remote document API clients."""

from __future__ import annotations

from docrelay.remote.notion import NotionBlocksClient
from docrelay.remote.protocol import (
    AppendResult,
    ArchiveResult,
    NodeLookup,
    RemoteDocumentClient,
    RemoteResponse,
)

__all__ = [
    "AppendResult",
    "ArchiveResult",
    "NodeLookup",
    "NotionBlocksClient",
    "RemoteDocumentClient",
    "RemoteResponse",
]
