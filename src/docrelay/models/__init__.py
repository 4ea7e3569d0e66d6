"""Pydantic models used across the project."""

from __future__ import annotations

from docrelay.models.actions import Action, AppendAction, BatchRequest, DeleteAction, parse_action
from docrelay.models.blocks import ContentBlock, extract_text, paragraph_node
from docrelay.models.report import Entry, ErrorEntry, ExecutionReport, ResultEntry

__all__ = [
    "Action",
    "AppendAction",
    "BatchRequest",
    "ContentBlock",
    "DeleteAction",
    "Entry",
    "ErrorEntry",
    "ExecutionReport",
    "ResultEntry",
    "extract_text",
    "paragraph_node",
    "parse_action",
]
