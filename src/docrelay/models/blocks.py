"""Content block models.

A caller may describe a block either as a plain string or as a Notion block object. Plain text
is wrapped into a paragraph node before it is sent; rich blocks are forwarded verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

BlockKind = Literal["rich", "plain"]

# Block types whose first rich_text run is read as the block's text.
_TEXT_BEARING_TYPES = ("paragraph", "heading_3")

NO_TEXT = "(no text)"

# Keys of a bare text payload such as {"text": "hello"}.
_PLAIN_KEYS = frozenset({"text", "object"})


def paragraph_node(text: str) -> dict[str, Any]:
    """Build a Notion paragraph block holding a single text run."""

    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {
            "rich_text": [{"type": "text", "text": {"content": text}}],
        },
    }


def _runs_content(value: Any) -> str:
    if not isinstance(value, Mapping):
        return ""
    runs = value.get("rich_text")
    if not isinstance(runs, list):
        return ""
    parts: list[str] = []
    for run in runs:
        text = run.get("text") if isinstance(run, Mapping) else None
        content = text.get("content") if isinstance(text, Mapping) else None
        if isinstance(content, str):
            parts.append(content)
    return "".join(parts)


def extract_text(raw: Mapping[str, Any]) -> str:
    """Extract the text of a block, joining all of its text runs.

    Unknown shapes yield an empty string.
    """

    for block_type in _TEXT_BEARING_TYPES:
        content = _runs_content(raw.get(block_type))
        if content:
            return content
    text = raw.get("text")
    return text if isinstance(text, str) else ""


def is_plain_mapping(payload: Mapping[str, Any]) -> bool:
    """Whether a mapping is a bare ``{"text": ...}`` rather than a Notion block.

    Notion accepts blocks without ``type`` (``{"heading_2": {...}}``), so any key besides
    ``text`` and ``object`` marks the mapping as a block body to forward as-is.
    """

    return "text" in payload and set(payload) <= _PLAIN_KEYS


class ContentBlock(BaseModel):
    """A block to append, either rich (caller structure) or plain text."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str = ""
    raw: dict[str, Any] | None = Field(default=None)

    @classmethod
    def from_payload(cls, payload: str | Mapping[str, Any]) -> ContentBlock:
        """Build a block from a request payload.

        A bare ``{"text": "hello"}`` is plain text; any other mapping is a Notion block and is
        forwarded unchanged, with or without a ``type`` key.
        """

        if isinstance(payload, str):
            return cls(kind="plain", text=payload)
        if isinstance(payload, Mapping):
            if is_plain_mapping(payload):
                return cls(kind="plain", text=extract_text(payload))
            return cls(kind="rich", text=extract_text(payload), raw=dict(payload))
        raise TypeError(f"Unsupported block payload type: {type(payload).__name__}")

    @classmethod
    def plain(cls, text: str) -> ContentBlock:
        return cls(kind="plain", text=text)

    def to_node(self) -> dict[str, Any]:
        """Return the node sent to the remote API."""

        if self.kind == "rich" and self.raw is not None:
            return dict(self.raw)
        return paragraph_node(self.text)

    @property
    def display_text(self) -> str:
        return self.text or NO_TEXT
