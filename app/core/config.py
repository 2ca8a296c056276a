# app/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime and cover:
    - DB connection for the read-only timetable collaborator tables
    - Logging level
    - Weekly grid slot layout
    - Query window limits
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    APP_NAME: str = "Timetable Engine"
    APP_ENV: str = Field("local", description="Environment name: local/test/dev/stage/prod")

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./timetable.db",
        description="SQLAlchemy-compatible async database URL",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level for the service (DEBUG, INFO, WARNING, ...).",
    )

    # --- Weekly grid layout ---
    GRID_FIRST_HOUR: int = Field(
        default=8,
        ge=0,
        le=23,
        description="Hour of day at which the first weekly grid slot starts.",
    )
    GRID_SLOT_MINUTES: int = Field(
        default=60,
        gt=0,
        le=24 * 60,
        description="Width of a weekly grid slot in minutes.",
    )
    GRID_SLOT_COUNT: int = Field(
        default=12,
        gt=0,
        description="Number of slots per day in the weekly grid.",
    )

    MAX_WINDOW_DAYS: int = Field(
        default=366,
        gt=0,
        description=(
            "Longest date window (in days, inclusive) accepted by the "
            "occurrence endpoints. Bounds the expansion work per request."
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
