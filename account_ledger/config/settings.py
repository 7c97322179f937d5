"""
Configuration Management for Account Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Store location, storage keys and display locale are read once and
validated at startup instead of being scattered as literals.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SUPPORTED_LOCALES = ("pt_BR", "en_US")


class StorageFailurePolicy(str, Enum):
    """What the ledger does when stored state cannot be read."""
    FATAL = "fatal"  # Propagate the storage error to the caller
    RESET = "reset"  # Log it and fall back to an empty account


class LedgerSettings(BaseSettings):
    """
    Ledger settings.

    Loads configuration from LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    store_path: str = Field(
        default="ledger_store.json",
        description="Path of the JSON file backing the key-value store"
    )
    balance_key: str = Field(
        default="saldo",
        min_length=1,
        description="Store key holding the balance"
    )
    transactions_key: str = Field(
        default="transacoes",
        min_length=1,
        description="Store key holding the transaction list"
    )
    storage_failure_policy: StorageFailurePolicy = Field(
        default=StorageFailurePolicy.FATAL,
        description="Behaviour when stored state is corrupt or unreadable"
    )

    # Account
    owner_name: str = Field(
        default="Joana da Silva Oliveira",
        min_length=1,
        description="Account holder used when none is given explicitly"
    )

    # Presentation
    display_locale: str = Field(
        default="pt_BR",
        description="Locale for month-group labels"
    )

    @field_validator('display_locale')
    @classmethod
    def validate_display_locale(cls, v: str) -> str:
        """Only locales with built-in month names are accepted."""
        normalized = v.replace("-", "_")
        for supported in SUPPORTED_LOCALES:
            if normalized.lower() == supported.lower():
                return supported
        raise ValueError(
            f"Unsupported display locale: {v}. Supported: {', '.join(SUPPORTED_LOCALES)}"
        )


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
