import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_RECENT_WORKOUTS = 5


def get_database_url() -> str:
    """DATABASE_URL, or a SQLite file at the repository root for local development.

    The SQLite path is made absolute so the CLI and the server find the same
    file regardless of the working directory.
    """
    env_url = os.getenv("DATABASE_URL", "")
    if env_url:
        return env_url

    sqlite_path = (Path(__file__).parent.parent.parent / "tritrack.db").resolve()
    logger.warning(f"DATABASE_URL not set, using local SQLite database at {sqlite_path}")
    return f"sqlite:///{sqlite_path}"


class Settings(BaseSettings):
    database_url: str = Field(default_factory=get_database_url, validation_alias="DATABASE_URL")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    dev_user_id: str = Field(
        default="",
        validation_alias="DEV_USER_ID",
        description="User ID used when a request carries no X-User-Id header (local development only)",
    )
    recent_workouts_limit: int = Field(
        default=DEFAULT_RECENT_WORKOUTS,
        validation_alias="RECENT_WORKOUTS_LIMIT",
        description="Number of completed workouts shown on the dashboard",
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def normalize_postgres_scheme(cls, value: str) -> str:
        """Hosted databases hand out ``postgres://`` URLs, which SQLAlchemy no longer accepts."""
        if value.startswith("postgres://"):
            return "postgresql://" + value.removeprefix("postgres://")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            logger.warning(f"Unknown LOG_LEVEL '{value}', using INFO")
            return "INFO"
        return level

    @field_validator("recent_workouts_limit")
    @classmethod
    def validate_recent_limit(cls, value: int) -> int:
        if value < 1:
            logger.warning(f"RECENT_WORKOUTS_LIMIT must be at least 1, got {value}; using {DEFAULT_RECENT_WORKOUTS}")
            return DEFAULT_RECENT_WORKOUTS
        return value


settings = Settings()
