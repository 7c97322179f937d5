"""Services package."""

from account_ledger.services.storage import (
    CorruptValueError,
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    StorageError,
    StorageWriteError,
)

__all__ = [
    "CorruptValueError",
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
    "StorageWriteError",
]
