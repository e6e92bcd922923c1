"""Client configuration sourced from ``DRAGONEYE_*`` environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .common import BASE_API_URL


class DragoneyeSettings(BaseSettings):
    """Pydantic settings container for the client."""

    model_config = SettingsConfigDict(env_prefix="DRAGONEYE_", extra="ignore")

    api_key: str | None = Field(
        default=None,
        description="Bearer token for the Dragoneye API (DRAGONEYE_API_KEY).",
    )
    base_url: str = Field(
        default=BASE_API_URL,
        description="Root URL of the Dragoneye API.",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every HTTP request in seconds.",
    )
    polling_interval_ms: int = Field(
        default=1_000,
        ge=0,
        description="Delay between prediction task status polls in milliseconds.",
    )


__all__ = ["DragoneyeSettings"]
