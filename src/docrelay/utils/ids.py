"""ID utilities."""

from __future__ import annotations

import re

from docrelay.errors import InvalidIdFormat

_NODE_ID_RE = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)


def normalize_node_id(raw: str) -> str:
    """Normalize a Notion block id.

    Hyphens are pure separators, so ``2ea6b442-22f2-...`` and ``2ea6b44222f2...`` are the same
    id.

    Args:
        raw: Id as supplied by the caller.

    Returns:
        The 32-character lowercase hex id.

    Raises:
        InvalidIdFormat: If the id is not 32 hex characters once hyphens are removed.
    """

    if not isinstance(raw, str):
        raise InvalidIdFormat(str(raw))
    clean = raw.replace("-", "")
    if not _NODE_ID_RE.match(clean):
        raise InvalidIdFormat(raw)
    return clean.lower()


def is_valid_node_id(raw: str) -> bool:
    try:
        normalize_node_id(raw)
    except InvalidIdFormat:
        return False
    return True
