"""
Castle Settings

Settings for the shared schema package, loaded from environment variables
prefixed with CASTLE_ or from a local .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="CASTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Configuration file
    config_path: Path = Path("./castle.json")
    config_encoding: str = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
