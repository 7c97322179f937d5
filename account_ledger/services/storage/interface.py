"""
Abstract Key-Value Store Interface

DESIGN DECISION: The ledger talks to storage through a tiny key-value
contract. This allows us to:
1. Use a JSON file for durable local persistence
2. Use in-memory storage for testing
3. Swap in another backend without touching ledger logic

Values are stored as JSON strings, one per key, the same shape a
browser's localStorage holds. Serialization is shared by every backend
and lives here.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from pydantic_core import to_jsonable_python


Reviver = Callable[[str, Any], Any]


class KeyValueStore(ABC):
    """
    Abstract interface for key-value persistence.

    Backends only implement raw string access; encoding, decoding and
    the optional per-field transform are handled here.
    """

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """
        Read the raw serialized value for a key.

        Returns:
            The stored string, or None if the key was never set

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        """
        Write a serialized value, overwriting any previous one.

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass

    def set(self, key: str, value: Any) -> None:
        """
        Serialize a value to JSON and store it under key.

        Decimals, datetimes and pydantic models are converted to their
        JSON form first.
        """
        self._write(key, encode_value(value))

    def get(self, key: str, transform: Optional[Reviver] = None) -> Any:
        """
        Deserialize the value stored under key.

        Args:
            key: Storage key
            transform: Optional callable(key, value) applied to every
                      nested field, innermost first, like a JSON reviver

        Returns:
            The decoded value, or None if the key was never set

        Raises:
            CorruptValueError: If the stored string is not valid JSON
        """
        raw = self._read(key)
        if raw is None:
            return None
        return decode_value(key, raw, transform)


def encode_value(value: Any) -> str:
    """Encode a value as the JSON string kept by the store."""
    try:
        return json.dumps(to_jsonable_python(value), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise StorageWriteError(f"Value is not JSON serializable: {e}")


def decode_value(key: str, raw: str, transform: Optional[Reviver] = None) -> Any:
    """Decode a stored JSON string, applying transform if given."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptValueError(f"Stored value for '{key}' is not valid JSON: {e}")

    if transform is None:
        return value
    return transform("", _revive(value, transform))


def _revive(value: Any, transform: Reviver) -> Any:
    if isinstance(value, dict):
        return {k: transform(k, _revive(v, transform)) for k, v in value.items()}
    if isinstance(value, list):
        return [transform(str(i), _revive(v, transform)) for i, v in enumerate(value)]
    return value


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptValueError(StorageError):
    """Stored data could not be decoded."""
    pass


class StorageWriteError(StorageError):
    """Value could not be written to the backend."""
    pass
