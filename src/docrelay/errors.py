"""Error taxonomy for remote document operations.

Operations never let these escape to the batch level; they are converted into report entries.
The classes still exist so the client and the single-action endpoints can signal failures in a
uniform way.
"""

from __future__ import annotations


class DocRelayError(RuntimeError):
    pass


class InvalidIdFormat(DocRelayError):
    """A node identifier that is not 32 hex characters once hyphens are removed."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid Notion block ID format: {raw!r}")
        self.raw = raw


class RemoteError(DocRelayError):
    """A non-2xx answer from the remote API."""

    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"remote status={status}")
        self.status = status
        self.body = body


class RemoteNotFound(RemoteError):
    pass


class RemoteConflict(RemoteError):
    """The node is already archived."""


class RemoteRejected(RemoteError):
    pass


class TransportFailure(DocRelayError):
    """Network failure or an undecodable response."""
