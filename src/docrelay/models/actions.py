"""Batch action models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeleteAction(BaseModel):
    """Archive one node."""

    model_config = ConfigDict(frozen=True)

    op: Literal["delete"] = "delete"
    id: str


class AppendAction(BaseModel):
    """Append one block (split into several writes when oversized)."""

    model_config = ConfigDict(frozen=True)

    op: Literal["append"] = "append"
    block: Any


Action = DeleteAction | AppendAction


class BatchRequest(BaseModel):
    """Body of ``POST /execute``.

    Actions stay raw here; they are parsed one by one during execution so a malformed entry
    does not reject the whole batch.
    """

    actions: list[Any] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


def parse_action(raw: Any) -> Action | None:
    """Parse a raw action, returning None when it matches no known kind.

    A delete needs a non-empty ``id``; an append needs a non-empty ``block``.
    """

    if not isinstance(raw, Mapping):
        return None
    op = raw.get("op")
    if op == "delete" and raw.get("id"):
        ident = raw["id"]
        return DeleteAction(id=ident if isinstance(ident, str) else str(ident))
    if op == "append" and raw.get("block"):
        return AppendAction(block=raw["block"])
    return None
