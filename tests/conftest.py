"""Shared fixtures."""

from __future__ import annotations

import pytest

from docrelay.config import Settings
from docrelay.remote.notion import NotionBlocksClient
from fake_notion import PAGE_ID, FakeNotion


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        notion_token="secret-token",
        page_id=PAGE_ID,
        max_payload=1800,
        log_level="WARNING",
    )


@pytest.fixture()
def notion() -> FakeNotion:
    return FakeNotion(page_id=PAGE_ID)


@pytest.fixture()
def client(notion: FakeNotion, settings: Settings) -> NotionBlocksClient:
    return NotionBlocksClient.from_settings(settings, transport=notion.transport)
