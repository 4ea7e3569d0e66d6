"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `DOCRELAY_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """docrelay settings.

    All fields are environment-configurable. Prefix is `DOCRELAY_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCRELAY_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    app_env: Literal["dev", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    # Notion
    notion_token: str | None = Field(default=None)
    notion_version: str = Field(default="2025-09-03")
    notion_api_base_url: str = Field(default="https://api.notion.com")
    page_id: str = Field(default="2ea6b44222f2803cb41af259bea472c2")

    # Character budget per remote write, well under the API's byte limit
    # so the JSON wrapping still fits.
    max_payload: int = Field(default=1800, ge=1, le=2000)
    read_page_size: int = Field(default=100, ge=1, le=100)

    # Batch
    report_unknown_actions: bool = Field(default=False)

    # Networking
    http_timeout_s: float = Field(default=30.0, ge=1.0, le=300.0)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("DOCRELAY_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
