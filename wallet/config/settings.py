"""
Configuration Management for the Wallet Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

The ledger itself needs no external services, so the only knobs are
about how it reports what it does.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WalletSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from WALLET_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level for ledger log events"
    )
    log_json: bool = Field(
        default=True,
        description="Render log events as JSON (console renderer otherwise)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}. Allowed: {VALID_LOG_LEVELS}")
        return level


@lru_cache()
def get_settings() -> WalletSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return WalletSettings()
