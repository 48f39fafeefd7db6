"""Application settings."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``BKM_*`` environment variables or a .env file."""

    data_dir: Optional[Path] = Field(
        None, description="Directory holding bookmarks.json and config.json"
    )
    log_level: str = Field(default="WARNING", description="Logging level")
    unique_titles: bool = Field(
        default=False, description="Reject new bookmarks whose title is already used"
    )

    model_config = SettingsConfigDict(
        env_prefix="BKM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level
