"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Backend API
    api_base_url: str = "http://localhost:3001/api"
    api_token: str = ""
    api_timeout_s: float = 30.0
    trips_page_limit: int = 10

    # Durable storage
    storage_backend: Literal["memory", "file", "redis"] = "file"
    storage_path: str = ".travelmind/state.json"
    redis_url: str | None = None
    redis_key_prefix: str = "travelmind:"

    # Storage keys
    selected_trip_key: str = "selectedTripId"
    view_key: str = "currentView"

    # Degraded mode
    demo_fallback: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
