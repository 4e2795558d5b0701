"""Configuration management for the Beacon agent."""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BEACON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Collector connection
    collector_url: str = "http://localhost:8080"
    shared_secret: Optional[str] = None
    request_timeout: float = Field(default=5.0, gt=0)

    # Authentication
    reauthenticate: bool = True
    startup_retries: int = Field(default=0, ge=0)
    retry_delay: float = Field(default=5.0, ge=0)

    # Sampling
    interval: float = Field(default=5.0, gt=0)
    sampler: str = "command"
    disk_path: str = "/"
    command_timeout: float = Field(default=10.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings()
