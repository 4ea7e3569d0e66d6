"""Tests for content block parsing."""

from __future__ import annotations

import pytest

from docrelay.models.blocks import NO_TEXT, ContentBlock, extract_text, paragraph_node


def test_string_payload_is_plain_text() -> None:
    block = ContentBlock.from_payload("hello")
    assert block.kind == "plain"
    assert block.text == "hello"
    assert block.to_node() == paragraph_node("hello")


def test_text_only_mapping_is_wrapped_as_paragraph() -> None:
    block = ContentBlock.from_payload({"text": "hello"})
    assert block.kind == "plain"
    assert block.to_node()["paragraph"]["rich_text"][0]["text"]["content"] == "hello"


def test_rich_paragraph_is_forwarded_verbatim() -> None:
    node = paragraph_node("rich text")
    node["paragraph"]["color"] = "blue"
    block = ContentBlock.from_payload(node)

    assert block.kind == "rich"
    assert block.text == "rich text"
    assert block.to_node() == node


def test_heading_three_text_is_extracted() -> None:
    node = {
        "object": "block",
        "type": "heading_3",
        "heading_3": {"rich_text": [{"type": "text", "text": {"content": "Title"}}]},
    }
    assert extract_text(node) == "Title"
    assert ContentBlock.from_payload(node).display_text == "Title"


@pytest.mark.parametrize(
    "node",
    [
        {"type": "divider", "divider": {}},
        {"type": "paragraph", "paragraph": {"rich_text": []}},
        {"type": "paragraph", "paragraph": "oops"},
        {"type": "to_do", "to_do": {"rich_text": [{"text": {"content": "hidden"}}]}},
    ],
)
def test_unknown_shapes_yield_empty_text(node: dict) -> None:
    block = ContentBlock.from_payload(node)
    assert block.text == ""
    assert block.display_text == NO_TEXT


def test_unsupported_payload_type_raises() -> None:
    with pytest.raises(TypeError):
        ContentBlock.from_payload(["not", "a", "block"])  # type: ignore[arg-type]


def test_typeless_block_is_rich_and_forwarded_unchanged() -> None:
    """Notion accepts blocks without ``type``; they must not be rewritten as paragraphs."""

    node = {"heading_2": {"rich_text": [{"text": {"content": "Lacinato kale"}}]}}
    block = ContentBlock.from_payload(node)

    assert block.kind == "rich"
    assert block.to_node() == node


def test_multi_run_paragraph_keeps_runs_and_joins_text() -> None:
    node = {
        "object": "block",
        "paragraph": {
            "rich_text": [
                {"type": "text", "text": {"content": "Read "}},
                {
                    "type": "text",
                    "text": {"content": "the docs", "link": {"url": "https://developers.notion.com"}},
                    "annotations": {"bold": True},
                },
            ]
        },
    }
    block = ContentBlock.from_payload(node)

    assert block.kind == "rich"
    assert block.text == "Read the docs"
    assert block.to_node() == node


def test_text_with_object_key_is_still_plain() -> None:
    block = ContentBlock.from_payload({"object": "block", "text": "hello"})
    assert block.kind == "plain"
    assert block.to_node() == paragraph_node("hello")
