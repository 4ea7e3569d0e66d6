"""Execution report models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ResultEntry(BaseModel):
    """One successful remote effect."""

    op: str
    id: str | None = None
    text: str | None = None
    status: int | None = None
    note: str | None = None


class ErrorEntry(BaseModel):
    """One failed action, or one failed chunk of a split append."""

    op: str
    id: str | None = None
    text: str | None = None
    error: str | None = None
    status: int | None = None
    response: str | None = None


Entry = ResultEntry | ErrorEntry


class ExecutionReport(BaseModel):
    """Ordered outcome of a batch. Entries are only ever appended."""

    executed: list[ResultEntry] = Field(default_factory=list)
    errors: list[ErrorEntry] = Field(default_factory=list)

    def record(self, entry: Entry) -> None:
        if isinstance(entry, ErrorEntry):
            self.errors.append(entry)
        else:
            self.executed.append(entry)

    def extend(self, entries: list[Entry]) -> None:
        for entry in entries:
            self.record(entry)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
