# tutordesk/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    APP_NAME: str = "TutorDesk"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")

    LOG_LEVEL: str = Field(
        "INFO",
        description="Root logging level passed to logging.basicConfig.",
    )

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./tutordesk.db",
        description="SQLAlchemy-compatible async database URL",
    )

    DEFAULT_TERM_COLOR: str = Field(
        "#3B82F6",
        description="Display colour assigned to new terms when none is given.",
    )
    DEFAULT_HOLIDAY_COLOR: str = Field(
        "#F59E0B",
        description="Display colour assigned to new holidays when none is given.",
    )

    MAX_REPEAT_COUNT: int = Field(
        52,
        description="Upper bound on the number of occurrences of a repeating meeting.",
    )
    UPCOMING_DAYS: int = Field(
        7,
        description="Default look-ahead window (days) for the upcoming meetings list.",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
