from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """API settings, read from MINISTORE_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix="MINISTORE_", env_file=".env")

    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    seed_fixtures: bool = True


@lru_cache
def get_settings():
    return Settings()
