"""docrelay: HTTP proxy that turns document-editing intents into Notion blocks API calls."""

from __future__ import annotations

__version__ = "0.1.0"
