"""
Configuration settings for MockBanker.

Uses Pydantic Settings to load environment variables for the state directory,
generation limits, logging, and UI preferences.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Persistence
    home_dir: Path = Field(Path.home() / ".mockbanker", alias="MOCKBANKER_HOME")
    history_limit: int = Field(50, ge=1, le=50, alias="HISTORY_LIMIT")

    # Generation
    max_count: int = Field(100, ge=1, alias="MAX_COUNT")
    default_count: int = Field(5, ge=1, alias="DEFAULT_COUNT")
    seed: Optional[int] = Field(None, alias="SEED")

    # UI
    selector_close_delay_ms: int = Field(200, ge=0, alias="SELECTOR_CLOSE_DELAY_MS")
    ambient_theme: Literal["light", "dark"] = Field("dark", alias="AMBIENT_THEME")

    # Application
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
