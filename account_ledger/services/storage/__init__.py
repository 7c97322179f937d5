"""
Storage Services Package

Provides the key-value store interface the ledger persists through,
plus a JSON file backend and an in-memory backend.
"""

from account_ledger.services.storage.interface import (
    CorruptValueError,
    KeyValueStore,
    StorageError,
    StorageWriteError,
)
from account_ledger.services.storage.json_file import JsonFileStore
from account_ledger.services.storage.memory import InMemoryStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "CorruptValueError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
]
