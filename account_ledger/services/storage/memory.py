"""
In-Memory Storage Implementation

Keeps serialized values in a dict. Used by tests and by callers that
do not need state to outlive the process.
"""

from typing import Optional

from account_ledger.services.storage.interface import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Key-value store backed by a plain dict of JSON strings."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        """
        Args:
            initial: Raw serialized values to start with, keyed by name
        """
        self._data: dict[str, str] = dict(initial or {})

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def raw(self, key: str) -> Optional[str]:
        """Serialized value exactly as stored."""
        return self._data.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
