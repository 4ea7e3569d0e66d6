"""FastAPI app exposing read, append, delete and batch execute endpoints."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from docrelay.config import Settings, load_settings
from docrelay.logging import configure_logging, get_logger, log_exception
from docrelay.models.actions import BatchRequest
from docrelay.remote.notion import NotionBlocksClient
from docrelay.service import DocumentService, ServiceResponse


class PrettyJSONResponse(JSONResponse):
    """JSON response indented for humans."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


class AppendRequest(BaseModel):
    """Append request. `text` is used only when `block` is absent."""

    block: dict[str, Any] | str | None = None
    text: str | None = None


def _respond(resp: ServiceResponse) -> PrettyJSONResponse:
    return PrettyJSONResponse(resp.body, status_code=resp.status)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create FastAPI app.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        transport: Optional httpx transport for the Notion client (used by tests).
    """

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    client = NotionBlocksClient.from_settings(settings, transport=transport)
    service = DocumentService(client, settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="docrelay", version="0.1.0", lifespan=lifespan)
    app.state.service = service

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> PrettyJSONResponse:
        if exc.status_code in (404, 405):
            return PrettyJSONResponse({"error": "Endpoint not found"}, status_code=404)
        return PrettyJSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(_: Request, exc: RequestValidationError) -> PrettyJSONResponse:
        return PrettyJSONResponse(
            {"error": "Invalid request body", "detail": jsonable_errors(exc)},
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> PrettyJSONResponse:
        log_exception(logger, "Unhandled API error", path=request.url.path)
        return PrettyJSONResponse({"error": str(exc) or "Unknown error"}, status_code=500)

    @app.get("/health")
    async def health() -> PrettyJSONResponse:
        return PrettyJSONResponse({"status": "ok"})

    @app.get("/read")
    async def read() -> PrettyJSONResponse:
        logger.info("API read requested")
        return _respond(await service.read())

    @app.post("/append")
    async def append(req: AppendRequest) -> PrettyJSONResponse:
        logger.info("API append requested", extra={"has_block": req.block is not None})
        return _respond(await service.append_one(block=req.block, text=req.text))

    @app.delete("/delete")
    async def delete(id: str | None = None) -> PrettyJSONResponse:  # noqa: A002
        logger.info("API delete requested", extra={"raw_id": id})
        return _respond(await service.delete_one(id))

    @app.post("/execute")
    async def execute(req: BatchRequest) -> PrettyJSONResponse:
        logger.info("API batch requested", extra={"action_count": len(req.actions)})
        return _respond(await service.execute(req.actions))

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Reduce validation errors to JSON-safe fields."""

    return [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", ""))}
        for err in exc.errors()
    ]
