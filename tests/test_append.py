"""Tests for the split-aware append workflow."""

from __future__ import annotations

import asyncio
import json

from docrelay.models.blocks import paragraph_node
from docrelay.models.report import ErrorEntry, ResultEntry
from docrelay.operations.append import AppendOperation
from docrelay.remote.notion import NotionBlocksClient
from fake_notion import PAGE_ID, FakeNotion


def _op(client: NotionBlocksClient, max_payload: int = 1800) -> AppendOperation:
    return AppendOperation(client, container_id=PAGE_ID, max_payload=max_payload)


def _text(length: int) -> str:
    return "".join(chr(ord("a") + i % 26) for i in range(length))


def test_short_text_is_one_write(client: NotionBlocksClient, notion: FakeNotion) -> None:
    entries = asyncio.run(_op(client).run({"text": "hello"}))

    assert len(entries) == 1
    entry = entries[0]
    assert isinstance(entry, ResultEntry)
    assert entry.text == "hello"
    assert entry.id is not None
    assert entry.status == 200
    assert notion.live_texts() == ["hello"]


def test_text_at_exact_limit_is_not_split(client: NotionBlocksClient, notion: FakeNotion) -> None:
    entries = asyncio.run(_op(client, max_payload=10).run(_text(10)))

    assert len(entries) == 1
    assert notion.append_calls == 1


def test_rich_block_structure_is_preserved(client: NotionBlocksClient, notion: FakeNotion) -> None:
    node = {
        "object": "block",
        "type": "heading_3",
        "heading_3": {"rich_text": [{"type": "text", "text": {"content": "Section"}}]},
    }
    entries = asyncio.run(_op(client).run(node))

    assert entries[0].text == "Section"
    stored = notion.blocks[notion.children[0]]
    assert stored.node == node


def test_oversized_text_is_split_in_reading_order(client: NotionBlocksClient, notion: FakeNotion) -> None:
    """k*max + r characters should become k+1 writes that preserve the text order."""

    text = _text(3 * 1800 + 7)
    entries = asyncio.run(_op(client).run(text))

    assert len(entries) == 4
    assert all(isinstance(e, ResultEntry) for e in entries)
    assert [e.text for e in entries] == [
        text[i : i + 50] + "..." for i in range(0, len(text), 1800)
    ]
    assert "".join(notion.live_texts()) == text
    assert [len(t) for t in notion.live_texts()] == [1800, 1800, 1800, 7]


def test_split_rich_block_becomes_plain_paragraphs(client: NotionBlocksClient, notion: FakeNotion) -> None:
    node = paragraph_node(_text(25))
    node["paragraph"]["color"] = "red"
    asyncio.run(_op(client, max_payload=10).run(node))

    stored = [notion.blocks[i].node for i in notion.children]
    assert stored == [paragraph_node(_text(25)[i : i + 10]) for i in (0, 10, 20)]


def test_partial_failure_keeps_earlier_chunks(client: NotionBlocksClient, notion: FakeNotion) -> None:
    notion.reject_append_calls = {1}
    text = _text(30)

    entries = asyncio.run(_op(client, max_payload=10).run(text))

    assert [type(e) for e in entries] == [ResultEntry, ErrorEntry, ResultEntry]
    failed = entries[1]
    assert failed.status == 400
    assert failed.text == text[10:20] + "..."
    assert notion.live_texts() == [text[:10], text[20:]]


def test_rejected_single_append_reports_status(client: NotionBlocksClient, notion: FakeNotion) -> None:
    notion.reject_append_calls = {0}
    entries = asyncio.run(_op(client).run("hello"))

    assert entries == [
        ErrorEntry(op="append", text="hello", status=400, response="body failed validation.")
    ]


def test_empty_block_text_is_reported_as_no_text(client: NotionBlocksClient) -> None:
    entries = asyncio.run(_op(client).run({"type": "divider", "divider": {}}))

    assert isinstance(entries[0], ResultEntry)
    assert entries[0].text == "(no text)"


def test_transport_failure_is_converted(client: NotionBlocksClient, notion: FakeNotion) -> None:
    notion.network_down = True
    entries = asyncio.run(_op(client, max_payload=10).run(_text(15)))

    assert len(entries) == 2
    assert all(isinstance(e, ErrorEntry) and e.error == "connection refused" for e in entries)


def test_unsupported_block_payload_is_an_error_entry(client: NotionBlocksClient, notion: FakeNotion) -> None:
    entries = asyncio.run(_op(client).run(["not", "a", "block"]))  # type: ignore[arg-type]

    assert len(entries) == 1
    assert isinstance(entries[0], ErrorEntry)
    assert notion.requests == []


def test_typeless_rich_blocks_are_sent_as_is(client: NotionBlocksClient, notion: FakeNotion) -> None:
    heading = {"heading_2": {"rich_text": [{"text": {"content": "Lacinato kale"}}]}}
    multi_run = {
        "paragraph": {
            "rich_text": [
                {"text": {"content": "plain "}},
                {"text": {"content": "bold"}, "annotations": {"bold": True}},
            ]
        }
    }

    entries = asyncio.run(_op(client).run(heading)) + asyncio.run(_op(client).run(multi_run))

    assert all(isinstance(e, ResultEntry) for e in entries)
    sent = [json.loads(r.content)["children"][0] for r in notion.requests]
    assert sent == [heading, multi_run]
    assert [notion.blocks[i].block_type for i in notion.children] == ["heading_2", "paragraph"]
    assert entries[1].text == "plain bold"


def test_single_write_entry_carries_a_preview(client: NotionBlocksClient, notion: FakeNotion) -> None:
    text = _text(120)
    entries = asyncio.run(_op(client).run(text))

    assert entries[0].text == text[:50]
    assert notion.live_texts() == [text]
