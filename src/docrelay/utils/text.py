"""Text splitting for size-bounded remote writes."""

from __future__ import annotations

from dataclasses import dataclass

PREVIEW_CHARS = 50


@dataclass(frozen=True)
class TextChunk:
    """A contiguous slice of a longer text."""

    content: str

    @property
    def preview(self) -> str:
        return self.content[:PREVIEW_CHARS]


def split_text(text: str, max_len: int) -> list[TextChunk]:
    """Split text into ordered chunks of at most `max_len` characters.

    Joining the chunks' content in order gives back `text` exactly. Text that already fits
    (including the empty string) comes back as a single chunk.

    Args:
        text: Text to split.
        max_len: Maximum characters per chunk.

    Returns:
        Chunks in left-to-right order.
    """

    if max_len < 1:
        raise ValueError(f"max_len must be positive, got {max_len}")
    if len(text) <= max_len:
        return [TextChunk(content=text)]
    return [TextChunk(content=text[i : i + max_len]) for i in range(0, len(text), max_len)]
