"""
Application settings loaded from environment variables (WEBPRINT_*) and .env.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LoadStrategyKind = Literal["polling", "signal"]


def _default_storage_root() -> Path | None:
    """Application-owned storage root used when a file load gives no access root."""
    documents = Path.home() / "Documents"
    return documents if documents.is_dir() else None


class Settings(BaseSettings):
    """WebPrint runtime settings."""

    model_config = SettingsConfigDict(
        env_prefix="WEBPRINT_",
        env_file=".env",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8200
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Local file access
    storage_root: Path | None = Field(default_factory=_default_storage_root)

    # Browser host
    browser_headless: bool = True
    viewport_width: int = 1024
    viewport_height: int = 768

    # Load completion
    load_strategy: LoadStrategyKind = "polling"
    poll_interval_seconds: float = 1.0
    signal_name: str = "webprintReady"
    load_timeout_seconds: float | None = 60.0

    # Export
    print_background: bool = True

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("poll_interval_seconds")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        return value


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, creating them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def init_settings(settings: Settings) -> Settings:
    """Install explicit settings (tests, embedding applications)."""
    global _settings
    _settings = settings
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
