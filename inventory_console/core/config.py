"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Freshness windows and refresh intervals are validated
at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Console settings loaded from environment and .env.

    All settings have defaults. The dashboard values mirror the console's
    freshness policy: aggregates go stale after a minute and are refreshed
    in the background every 30 seconds while observed.
    """

    # App
    app_name: str = "inventory-console"
    app_version: str = "1.0.0"
    debug: bool = False

    # Backend REST API (transport collaborator)
    api_base_url: str = "http://localhost:5000/api"
    api_timeout_seconds: float = 30.0

    # Session tokens
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # Freshness policy (seconds)
    dashboard_stale_after_seconds: float = 60.0
    dashboard_refetch_interval_seconds: float = 30.0
    locations_stale_after_seconds: float = 300.0
    location_stats_stale_after_seconds: float = 60.0
    refetch_max_backoff_seconds: float = 300.0
    # Upper bound on cached (resource, scope) entries per session
    cache_max_entries: int = 256

    # Navigation
    internal_search_path: str = "/products"
    # Where the selected location survives restarts; None keeps it in memory.
    selection_store_path: str | None = None

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_freshness_policy(self) -> "Settings":
        """Validate freshness windows and refresh intervals.

        - Every window and interval must be positive.
        - The refresh backoff ceiling cannot be below the refresh interval.
        """
        for name in (
            "dashboard_stale_after_seconds",
            "dashboard_refetch_interval_seconds",
            "locations_stale_after_seconds",
            "location_stats_stale_after_seconds",
            "refetch_max_backoff_seconds",
            "api_timeout_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.refetch_max_backoff_seconds < self.dashboard_refetch_interval_seconds:
            raise ValueError(
                "refetch_max_backoff_seconds must be >= dashboard_refetch_interval_seconds"
            )
        if self.cache_max_entries < 1:
            raise ValueError("cache_max_entries must be at least 1")
        if not self.internal_search_path.startswith("/"):
            raise ValueError(
                f"internal_search_path must be an absolute path, got: {self.internal_search_path!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
