"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    discovery_base_url: str = "https://uk.api.just-eat.io"
    upstream_timeout_seconds: float = 10.0
    max_results: int = 10
    cache_backend: Literal["memory", "supabase"] = "memory"
    cache_ttl_seconds: int = 1800
    cache_max_entries: int = 1000
    cache_shard_count: int = 16
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
