"""Application settings and configuration."""

from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Trade Ledger"
    app_version: str = "0.1.0"

    # Ledger store
    database_url: str = "sqlite:///./trade_ledger.db"
    sqlite_busy_timeout_seconds: float = 30.0

    # Ledger behavior
    starting_cash_balance: Decimal = Decimal("10000")
    history_limit: int = 365
    default_account_id: str = "default-user"

    log_level: str = "INFO"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
