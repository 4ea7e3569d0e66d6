"""Notion blocks API client.

Thin async wrapper over `httpx`. It carries the bearer token and the `Notion-Version` header on
every call and turns network failures and undecodable bodies into `TransportFailure`. Non-2xx
answers are returned, not raised; callers decide what a failure means.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from docrelay.config import Settings
from docrelay.errors import TransportFailure
from docrelay.logging import get_logger
from docrelay.remote.protocol import AppendResult, ArchiveResult, NodeLookup, RemoteResponse

logger = get_logger(__name__)

ARCHIVED_MARKER = "Can't edit block that is archived"


class NotionBlocksClient:
    """Client for the subset of the Notion blocks API used by docrelay."""

    def __init__(
        self,
        *,
        token: str | None,
        version: str,
        base_url: str = "https://api.notion.com",
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {
            "Notion-Version": version,
            "Content-Type": "application/json",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("Notion token is not set; remote calls will be rejected")

        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/v1",
            headers=headers,
            timeout=httpx.Timeout(timeout_s),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> NotionBlocksClient:
        return cls(
            token=settings.notion_token,
            version=settings.notion_version,
            base_url=settings.notion_api_base_url,
            timeout_s=settings.http_timeout_s,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> NotionBlocksClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        started = time.monotonic()
        try:
            resp = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning(
                "Notion request failed",
                extra={"method": method, "path": path, "error_type": type(e).__name__},
            )
            raise TransportFailure(str(e) or type(e).__name__) from e

        logger.debug(
            "Notion request ok",
            extra={
                "method": method,
                "path": path,
                "status_code": resp.status_code,
                "request_id": resp.headers.get("x-request-id"),
                "latency_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise TransportFailure(
                f"Malformed JSON response from Notion (status={resp.status_code})"
            ) from e

    async def fetch_node(self, node_id: str) -> NodeLookup:
        resp = await self._request("GET", f"/blocks/{node_id}")
        try:
            body: Any = resp.json()
        except ValueError:
            body = resp.text
        return NodeLookup(found=resp.status_code != 404, status=resp.status_code, body=body)

    async def append_children(
        self, container_id: str, nodes: Sequence[Mapping[str, Any]]
    ) -> AppendResult:
        resp = await self._request(
            "PATCH",
            f"/blocks/{container_id}/children",
            json={"children": [dict(n) for n in nodes]},
        )
        return AppendResult(ok=resp.is_success, status=resp.status_code, body=self._json(resp))

    async def archive_node(self, node_id: str) -> ArchiveResult:
        resp = await self._request("PATCH", f"/blocks/{node_id}", json={"archived": True})
        return ArchiveResult(ok=resp.is_success, status=resp.status_code, body_text=resp.text)

    async def list_children(self, container_id: str, *, page_size: int = 100) -> RemoteResponse:
        resp = await self._request(
            "GET",
            f"/blocks/{container_id}/children",
            params={"page_size": page_size},
        )
        return RemoteResponse(status=resp.status_code, body=self._json(resp))

    def is_not_found(self, lookup: NodeLookup) -> bool:
        return lookup.status == 404

    def is_already_archived(self, result: ArchiveResult) -> bool:
        return ARCHIVED_MARKER in result.body_text
