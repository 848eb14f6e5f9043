from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..progress.signals import MIN_HISTORY_DAYS


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/mindbloom.db",
        alias="DATABASE_URL",
    )
    log_file: Path = Field(default=Path("logs/mindbloom.log"))
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Progress engine
    timezone: str = Field(default="UTC", alias="APP_TIMEZONE")
    weekly_goal_default: int = Field(default=5, alias="WEEKLY_GOAL_DEFAULT")
    progress_history_days: int = Field(default=400, alias="PROGRESS_HISTORY_DAYS")

    version: str = Field(default_factory=lambda: Settings._load_version())

    @staticmethod
    def _load_version() -> str:
        version_env = os.getenv("VERSION")
        if version_env:
            return version_env
        version_file = Path("VERSION")
        if version_file.exists():
            return version_file.read_text(encoding="utf-8").strip()
        return "0.0.0"

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @field_validator("log_file", mode="before")
    @classmethod
    def _validate_log_file(cls, value: Path | str) -> Path:
        path = Path(value)
        if not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        normalized = str(value or "INFO").upper()
        if normalized not in allowed:
            return "INFO"
        return normalized

    @field_validator("timezone", mode="before")
    @classmethod
    def _validate_timezone(cls, value: str | None) -> str:
        if not value:
            return "UTC"
        try:
            ZoneInfo(str(value))
        except (ZoneInfoNotFoundError, ValueError):
            return "UTC"
        return str(value)

    @field_validator("weekly_goal_default", mode="before")
    @classmethod
    def _validate_weekly_goal(cls, value: int | str | None) -> int:
        if value is None:
            return 5
        return max(int(value), 1)

    @field_validator("progress_history_days", mode="before")
    @classmethod
    def _validate_history_days(cls, value: int | str | None) -> int:
        if value is None:
            return 400
        return max(int(value), MIN_HISTORY_DAYS)

    @field_validator("database_url", mode="before")
    @classmethod
    def _validate_database_url(cls, value: str | None) -> str:
        if not value:
            value = "sqlite:///./data/mindbloom.db"

        normalized = str(value)
        if normalized.startswith("postgres://"):
            normalized = normalized.replace("postgres://", "postgresql://", 1)
        if normalized.startswith("postgresql://") and "+asyncpg" not in normalized:
            normalized = normalized.replace("postgresql://", "postgresql+asyncpg://", 1)
        if normalized.startswith("sqlite://") and "+aiosqlite" not in normalized:
            normalized = normalized.replace("sqlite://", "sqlite+aiosqlite://", 1)

        if normalized.startswith("sqlite+aiosqlite:///"):
            db_path = normalized.split("///", maxsplit=1)[-1]
            if db_path and db_path != ":memory:":
                db_file = Path(db_path)
                db_file.parent.mkdir(parents=True, exist_ok=True)

        return normalized


@lru_cache
def get_settings() -> Settings:
    """Cached settings accessor."""

    return Settings()
