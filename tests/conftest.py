"""Shared fixtures for the ledger tests."""

import time

import pytest

from account_ledger.config import LedgerSettings
from account_ledger.ledger import Ledger
from account_ledger.services.storage import InMemoryStore, StorageWriteError


@pytest.fixture
def settings() -> LedgerSettings:
    """Default settings, isolated from any local .env file."""
    return LedgerSettings(_env_file=None)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def ledger(store, settings) -> Ledger:
    return Ledger("Joana da Silva Oliveira", store, settings=settings)


@pytest.fixture
def brasilia_time(monkeypatch):
    """Run with the process local zone fixed at UTC-3, no DST."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "BRT3")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class FailingStore(InMemoryStore):
    """In-memory store whose writes to selected keys fail."""

    def __init__(self, fail_keys, initial=None):
        super().__init__(initial)
        self.fail_keys = set(fail_keys)

    def _write(self, key: str, raw: str) -> None:
        if key in self.fail_keys:
            raise StorageWriteError(f"Disk full while writing '{key}'")
        super()._write(key, raw)


@pytest.fixture
def failing_store():
    """Factory for stores that refuse writes to the given keys."""
    return FailingStore
