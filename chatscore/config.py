"""Runtime configuration loaded from the environment and ``.env``."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_STORE_MAX_RETRIES,
    DEFAULT_STORE_RATE_LIMIT,
    DEFAULT_STORE_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    # Backend
    SUPABASE_URL: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Store client behaviour
    STORE_MAX_RETRIES: int = DEFAULT_STORE_MAX_RETRIES
    STORE_TIMEOUT_SECONDS: float = DEFAULT_STORE_TIMEOUT_SECONDS
    STORE_RATE_LIMIT: int = DEFAULT_STORE_RATE_LIMIT

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def has_backend(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()
