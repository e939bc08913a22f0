"""Configuration for the marketplace client, read from ``MARKETPLACE_*`` variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_STORAGE_PATH = Path.home() / ".marketplace" / "session.json"


class ClientSettings(BaseSettings):
    """Typed settings shared by every front-end that embeds the client."""

    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Base URL of the marketplace API.",
    )
    storage_path: Path = Field(
        default=DEFAULT_STORAGE_PATH,
        description="JSON file holding the persisted token and user.",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout applied by the HTTP transport.",
    )
    search_debounce_seconds: float = Field(
        default=0.45,
        ge=0,
        description="Quiet period after the last keystroke before a search runs.",
    )
    page_size: int = Field(
        default=12,
        ge=1,
        description="Products requested per catalog page.",
    )


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    """Return a cached instance of :class:`ClientSettings`."""

    return ClientSettings()
