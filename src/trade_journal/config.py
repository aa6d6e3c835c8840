"""Configuration loading from environment variables and the .env file."""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(str, Enum):
    """Log output format."""

    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """Journal settings.

    Loaded from environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Account ====================
    account_balance: float = Field(
        default=10_000.0,
        gt=0,
        description="Account balance used for sizing when a trade does not carry one",
    )
    default_risk_percent: float = Field(
        default=1.0,
        ge=0.0,
        le=100.0,
        description="Default risk per trade (percent of balance)",
    )
    daily_risk_limit_pct: float = Field(
        default=3.0,
        ge=0.0,
        le=100.0,
        description="Maximum combined risk per day (percent of balance)",
    )

    # ==================== Logging ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="Log output format",
    )

    # ==================== Storage ====================
    journal_dir: Path = Field(
        default=Path("data/journal"),
        description="Local trade journal directory",
    )

    @field_validator("journal_dir", mode="before")
    @classmethod
    def parse_journal_dir(cls, v: str | Path) -> Path:
        """Convert strings to Path."""
        return Path(v) if isinstance(v, str) else v

    def ensure_directories(self) -> None:
        """Make sure the journal directory exists."""
        self.journal_dir.mkdir(parents=True, exist_ok=True)

    @property
    def journal_file(self) -> Path:
        return self.journal_dir / "trades.jsonl"


# Global settings instance (lazy)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from the environment."""
    global _settings
    _settings = Settings()
    return _settings
