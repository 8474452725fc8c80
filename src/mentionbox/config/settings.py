"""Pydantic settings configuration for mentionbox."""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MENTIONBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Directory service settings
    host: str = "0.0.0.0"
    port: int = 9020
    log_level: LogLevel = LogLevel.INFO

    # Mention settings
    trigger: str = "@"
    quiet_interval_ms: int = Field(default=300, ge=0)

    # Directory source (URL wins over path when both are set)
    directory_path: str = "users.json"
    directory_url: str | None = None

    # Fetch settings
    fetch_timeout_seconds: float = Field(default=10.0, gt=0)
    retry_attempts: int = Field(default=2, ge=1)
    retry_backoff_ms: int = Field(default=500, ge=0)

    @field_validator("trigger")
    @classmethod
    def trigger_single_char(cls, v: str) -> str:
        """The trigger must be exactly one non-whitespace character."""
        if len(v) != 1 or v.isspace():
            raise ValueError(f"trigger must be a single non-whitespace character, got {v!r}")
        return v

    @property
    def quiet_interval_seconds(self) -> float:
        """Quiet interval converted to seconds."""
        return self.quiet_interval_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
