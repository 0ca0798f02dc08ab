"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.  Only the
request shell is configurable here; the acquisition thresholds are fixed
design constants that live in :mod:`text_harvester.acquisition.config`.

Usage::

    from text_harvester.config.settings import get_settings

    settings = get_settings()
    level = settings.log_level
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide configuration backed by environment variables and an optional .env file.

    Every field has a default, so the service starts without any environment.
    Variables are read with the ``TEXT_HARVESTER_`` prefix, e.g.
    ``TEXT_HARVESTER_LOG_LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TEXT_HARVESTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    app_name: str = "Text Harvester"
    """Human-readable application name shown in the OpenAPI docs."""

    debug: bool = False
    """Enable FastAPI debug mode and verbose error responses.  Never True in production."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    # ------------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------------

    allowed_origins: list[str] = ["*"]
    """Origins permitted by the CORS middleware.  The scrape endpoint is public."""

    allowed_methods: list[str] = ["GET", "OPTIONS"]
    """HTTP methods permitted by the CORS middleware."""

    allowed_headers: list[str] = ["Content-Type"]
    """Request headers permitted by the CORS middleware."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Uses ``functools.lru_cache`` so that Pydantic Settings reads the environment
    and .env file exactly once per process lifetime.  In tests, call
    ``get_settings.cache_clear()`` after patching environment variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
