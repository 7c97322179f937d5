"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON document holds every key, each value
being the JSON string the interface produced. This mirrors how a
browser's localStorage keeps data and makes the file easy to inspect.

TRADEOFFS:
- The whole file is rewritten on each set (fine for one account)
- No locking; one process at a time

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so a crash mid-write leaves the previous file.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from account_ledger.services.storage.interface import (
    CorruptValueError,
    KeyValueStore,
    StorageError,
    StorageWriteError,
)


class JsonFileStore(KeyValueStore):
    """Key-value store persisted to one JSON file on disk."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load_all(self) -> dict[str, str]:
        """Read the whole file. A missing file is an empty store."""
        if not self._path.exists():
            return {}

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read store file {self._path}: {e}")

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptValueError(f"Store file {self._path} is not valid JSON: {e}")

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise CorruptValueError(
                f"Store file {self._path} must hold an object of serialized strings"
            )
        return data

    def _dump_all(self, data: dict[str, str]) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write store file {self._path}: {e}")

    def _read(self, key: str) -> Optional[str]:
        return self._load_all().get(key)

    def _write(self, key: str, raw: str) -> None:
        data = self._load_all()
        data[key] = raw
        self._dump_all(data)

    def delete(self, key: str) -> None:
        data = self._load_all()
        if key in data:
            del data[key]
            self._dump_all(data)

    def clear(self) -> None:
        self._dump_all({})
