"""Configuration package."""

from pocket_ledger.config.settings import (
    DEFAULT_DATA_FILE,
    LedgerSettings,
    get_settings,
)

__all__ = [
    "DEFAULT_DATA_FILE",
    "LedgerSettings",
    "get_settings",
]
