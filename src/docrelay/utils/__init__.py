"""Pure helpers shared by the batch path and the single-action endpoints."""

from __future__ import annotations

from docrelay.utils.ids import is_valid_node_id, normalize_node_id
from docrelay.utils.text import TextChunk, split_text

__all__ = ["TextChunk", "is_valid_node_id", "normalize_node_id", "split_text"]
