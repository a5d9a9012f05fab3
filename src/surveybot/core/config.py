"""Runtime configuration.

Settings are read from environment variables once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = Path("data/surveybot.db")


class Settings(BaseSettings):
    """Process-wide settings.

    Each field is read from the environment variable named by its alias;
    keyword arguments use the field names.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )

    db_path: Path = Field(default=DEFAULT_DB_PATH, validation_alias="SURVEYBOT_DB_PATH")
    issuer_username: str = Field(default="issuer", validation_alias="ISSUER_USERNAME")
    issuer_password: str = Field(default="change-me", validation_alias="ISSUER_PASSWORD")
    session_secret: str = Field(default="dev-session-secret", validation_alias="SESSION_SECRET")
    port: int = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="SURVEYBOT_LOG_LEVEL")
    bcrypt_rounds: int = Field(default=10, validation_alias="SURVEYBOT_BCRYPT_ROUNDS")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings for this process."""
    return Settings()
