"""Configuration package."""

from account_ledger.config.settings import (
    LedgerSettings,
    StorageFailurePolicy,
    get_settings,
)

__all__ = [
    "LedgerSettings",
    "StorageFailurePolicy",
    "get_settings",
]
