"""
Configuration Management for Pocket Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here. Every setting can be given as a
LEDGER_* environment variable or in a local .env file; CLI options
override both.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_FILE = "transactions.csv"


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    data_file: Path = Field(
        default=Path(DEFAULT_DATA_FILE),
        description="Path of the pipe-delimited ledger file"
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the ledger file"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Log level name (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console text"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional file receiving log output"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept only standard level names."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        import codecs
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {v}")
        return v

    @property
    def log_level_number(self) -> int:
        """Numeric level for the stdlib logging module."""
        return logging.getLevelName(self.log_level)


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
