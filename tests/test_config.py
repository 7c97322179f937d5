"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from account_ledger.config import LedgerSettings, StorageFailurePolicy, get_settings


class TestLedgerSettings:
    """Tests for LedgerSettings."""

    def test_defaults(self, monkeypatch):
        for name in (
            "LEDGER_STORE_PATH",
            "LEDGER_OWNER_NAME",
            "LEDGER_DISPLAY_LOCALE",
            "LEDGER_STORAGE_FAILURE_POLICY",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = LedgerSettings(_env_file=None)

        assert settings.store_path == "ledger_store.json"
        assert settings.balance_key == "saldo"
        assert settings.transactions_key == "transacoes"
        assert settings.owner_name == "Joana da Silva Oliveira"
        assert settings.display_locale == "pt_BR"
        assert settings.storage_failure_policy == StorageFailurePolicy.FATAL

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LEDGER_OWNER_NAME", "Ana Souza")
        monkeypatch.setenv("LEDGER_STORAGE_FAILURE_POLICY", "reset")
        monkeypatch.setenv("LEDGER_DISPLAY_LOCALE", "en-us")

        settings = LedgerSettings(_env_file=None)

        assert settings.owner_name == "Ana Souza"
        assert settings.storage_failure_policy == StorageFailurePolicy.RESET
        assert settings.display_locale == "en_US"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LEDGER_STORE_PATH=/data/conta.json\n", encoding="utf-8")

        settings = LedgerSettings(_env_file=env_file)

        assert settings.store_path == "/data/conta.json"

    def test_unsupported_locale(self):
        with pytest.raises(ValidationError, match="Unsupported display locale"):
            LedgerSettings(_env_file=None, display_locale="fr_FR")

    def test_unknown_policy(self):
        with pytest.raises(ValidationError):
            LedgerSettings(_env_file=None, storage_failure_policy="retry")

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
