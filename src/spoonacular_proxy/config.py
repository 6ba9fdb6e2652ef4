"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from spoonacular_proxy.domain.operations import DEFAULT_TTL_SECONDS

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    spoonacular_api_key: str = ""
    spoonacular_base_url: str = "https://api.spoonacular.com"
    spoonacular_timeout_seconds: float = 15
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    environment: str = _ENVIRONMENT
    debug: bool = False
    cache_default_ttl_seconds: int = DEFAULT_TTL_SECONDS
    cache_ttl_overrides: dict[str, int] = {}
    cache_sweep_interval_seconds: float = 600
    cache_single_flight: bool = False

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
