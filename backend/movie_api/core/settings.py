from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MOVIE_API_",
        case_sensitive=False,
    )

    # Local async sqlite database by default.
    db_url: str = "sqlite+aiosqlite:///./data/movies.db"

    # CORS
    cors_allow_origin: str = "http://localhost:3000"
    cors_allow_credentials: bool = True

    # Request correlation: same header name inbound and outbound.
    correlation_header: str = "CorrelationId"

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    # Readiness report path (liveness stays at /healthz).
    health_endpoint: str = "/health"


@lru_cache
def get_settings() -> Settings:
    return Settings()
