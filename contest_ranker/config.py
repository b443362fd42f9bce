"""
Configuration settings for the contest ranker.

Uses Pydantic Settings to load environment variables for the feed source,
ranking defaults, and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Feed
    feed_url: Optional[str] = Field(None, alias="FEED_URL")
    feed_timeout_seconds: float = Field(10.0, alias="FEED_TIMEOUT_SECONDS", gt=0)
    feed_fetch_attempts: int = Field(1, alias="FEED_FETCH_ATTEMPTS", ge=1)

    # Ranking
    ranking_limit: int = Field(5, alias="RANKING_LIMIT", ge=1)

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
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
