from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env")

    database_url: str = "sqlite:///./trades.db"

    # Owner used when a request carries no X-User-Id header.
    # Empty means the header is required.
    default_user_id: str = ""


@lru_cache
def get_settings() -> Settings:
    return Settings()
