"""CLI entrypoints for docrelay."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import httpx
import typer

from docrelay.config import Settings, load_settings
from docrelay.logging import configure_logging, get_logger
from docrelay.remote.notion import NotionBlocksClient
from docrelay.service import DocumentService, ServiceResponse

app = typer.Typer(add_completion=False, help="docrelay: batch edits against a Notion page")
logger = get_logger(__name__)

# Optional transport override for the Notion client.
_transport: httpx.AsyncBaseTransport | None = None


def _load_plan(plan_file: Path) -> list[Any]:
    try:
        data = json.loads(plan_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"{plan_file} is not valid JSON: {e}") from e

    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        # Same as /execute: a missing or null "actions" is an empty batch.
        actions = data.get("actions")
        if actions is None:
            return []
        if isinstance(actions, list):
            return actions
    raise typer.BadParameter("Plan must be a list of actions or an object with an 'actions' list.")


async def _run(settings: Settings, action: str, payload: Any = None) -> ServiceResponse:
    async with NotionBlocksClient.from_settings(settings, transport=_transport) as client:
        service = DocumentService(client, settings)
        if action == "read":
            return await service.read()
        return await service.execute(payload)


def _echo(resp: ServiceResponse, pretty: bool) -> None:
    typer.echo(json.dumps(resp.body, ensure_ascii=False, indent=2 if pretty else None))


@app.command()
def execute(
    plan_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON plan file"),
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Indent the JSON report"),
    page_id: str | None = typer.Option(
        None,
        "--page-id",
        help="Container page id (overrides DOCRELAY_PAGE_ID)",
    ),
) -> None:
    """Run a batch plan and print the execution report."""

    actions = _load_plan(plan_file)
    settings = load_settings()
    if page_id is not None:
        settings.page_id = page_id

    configure_logging(settings.log_level)
    logger.info("CLI batch requested", extra={"action_count": len(actions)})

    resp = asyncio.run(_run(settings, "execute", actions))
    _echo(resp, pretty)
    if resp.body.get("errors"):
        raise typer.Exit(code=1)


@app.command()
def read(
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Indent the JSON output"),
) -> None:
    """Print the container page's children."""

    settings = load_settings()
    configure_logging(settings.log_level)

    resp = asyncio.run(_run(settings, "read"))
    _echo(resp, pretty)
    if resp.status >= 400:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
