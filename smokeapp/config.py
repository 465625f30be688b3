from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.timezone_utils import validate_timezone


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    DATABASE_URL: str = "sqlite:///smokeapp.db"

    # Calendar days are counted in this timezone
    DEFAULT_TIMEZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"

    # Statistics
    DEFAULT_AVERAGE_DAYS: int = 7
    DEFAULT_DYNAMICS_DAYS: int = 7

    # Quit schedule: reproduce the integer-division decay of the first app versions
    QUIT_SCHEDULE_LEGACY_DECAY: bool = False

    # Widget snapshot of the latest day, disabled when empty
    WIDGET_DATA_PATH: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @field_validator("DEFAULT_TIMEZONE")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if not validate_timezone(value):
            raise ValueError(f"Unknown timezone: {value}")
        return value


settings = Settings()
