"""
Configuration settings for the SQLite stress harness.

Uses Pydantic Settings to load environment variables for the backing store,
logging, and worker loop defaults. Defaults reproduce the harness' fixed
constants, so an empty environment runs five workers against `storage.db`.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Backing store
    db_path: str = Field("storage.db", alias="DB_PATH")
    db_timeout_seconds: float = Field(5.0, alias="DB_TIMEOUT_SECONDS", ge=0)

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Worker loop
    worker_count: int = Field(5, alias="STRESS_WORKERS", ge=1)
    max_iterations: Optional[int] = Field(None, alias="STRESS_MAX_ITERATIONS", ge=1)
    select_window_seconds: int = Field(60, alias="STRESS_SELECT_WINDOW", ge=0)
    delete_one_in: int = Field(100, alias="STRESS_DELETE_ONE_IN", ge=1)
    comment_segments: int = Field(25, alias="STRESS_COMMENT_SEGMENTS", ge=1)

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
