"""Remote document operations."""

from __future__ import annotations

from docrelay.operations.append import AppendOperation
from docrelay.operations.delete import DeleteOperation
from docrelay.operations.executor import BatchExecutor

__all__ = ["AppendOperation", "BatchExecutor", "DeleteOperation"]
