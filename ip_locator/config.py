from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from ip_locator.cache import DEFAULT_FRESHNESS_WINDOW_SECONDS


class Settings(BaseSettings):
    """Service settings, loaded from `IP_LOCATOR_*` environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="IP_LOCATOR_",
        env_file=".env",
        extra="ignore",
    )

    provider_base_url: str = "http://ip-api.com"
    provider_path_prefix: str = "/json/"
    provider_timeout_seconds: float = 5.0

    # Successful lookups are served from memory for this long.
    cache_freshness_seconds: float = DEFAULT_FRESHNESS_WINDOW_SECONDS
    # None keeps every entry for the process lifetime.
    cache_max_entries: int | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
