"""
Tests for audit logging.

Loggers are created inside capture_logs so structlog binds them to the
capturing processor chain.
"""

from datetime import datetime
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from account_ledger.audit import AuditLogger, create_correlation_id
from account_ledger.config import LedgerSettings, StorageFailurePolicy
from account_ledger.ledger import InsufficientFunds, Ledger
from account_ledger.models.audit import AuditEvent, AuditEventType, AuditSeverity
from account_ledger.models.transaction import Transaction, TransactionKind
from account_ledger.services.storage import InMemoryStore, StorageWriteError


def audit_types(logs: list[dict]) -> list[str]:
    return [entry["event_type"] for entry in logs if entry["event"] == "audit_event"]


class TestAuditLogger:
    """Tests for AuditLogger."""

    @pytest.mark.parametrize(
        "severity,level",
        [
            (AuditSeverity.INFO, "info"),
            (AuditSeverity.WARNING, "warning"),
            (AuditSeverity.ERROR, "error"),
            (AuditSeverity.DEBUG, "debug"),
        ],
    )
    def test_log_level_follows_severity(self, severity, level):
        with capture_logs() as logs:
            AuditLogger().log(AuditEvent(
                event_type=AuditEventType.SYSTEM_ERROR,
                severity=severity,
                description="test",
            ))

        assert len(logs) == 1
        assert logs[0]["log_level"] == level
        assert logs[0]["severity"] == severity.value

    def test_log_error(self):
        with capture_logs() as logs:
            AuditLogger().log_error("disk", "no space left", details={"path": "/tmp"})

        [entry] = logs
        assert entry["event_type"] == "system_error"
        assert entry["error_message"] == "no space left"
        assert entry["details"] == {"path": "/tmp"}

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()


class TestLedgerAuditTrail:
    """The ledger reports what it does through the audit logger."""

    def test_hydration_is_logged(self, settings):
        with capture_logs() as logs:
            Ledger("Joana", InMemoryStore(), settings=settings)

        [entry] = logs
        assert entry["event_type"] == "ledger_hydrated"
        assert entry["owner"] == "Joana"
        assert entry["details"] == {"balance": "0", "transaction_count": 0}

    def test_recorded_transaction_trail(self, settings):
        with capture_logs() as logs:
            ledger = Ledger("Joana", InMemoryStore(), settings=settings)
            ledger.record_transaction(Transaction(
                kind=TransactionKind.DEPOSIT, amount=Decimal("100"), date=datetime(2024, 1, 5),
            ))
            ledger.record_transaction(Transaction(
                kind=TransactionKind.TRANSFER, amount=Decimal("30"), date=datetime(2024, 1, 10),
            ))

        assert audit_types(logs) == [
            "ledger_hydrated",
            "balance_credited",
            "transaction_recorded",
            "balance_debited",
            "transaction_recorded",
        ]
        assert logs[-1]["details"]["amount"] == "-30"
        assert {entry["correlation_id"] for entry in logs} == {str(ledger.correlation_id)}

    def test_rejection_is_logged(self, settings):
        with capture_logs() as logs:
            ledger = Ledger("Joana", InMemoryStore(), settings=settings)
            with pytest.raises(InsufficientFunds):
                ledger.record_transaction(Transaction(
                    kind=TransactionKind.BILL_PAYMENT,
                    amount=Decimal("1000"),
                    date=datetime(2024, 2, 1),
                ))

        entry = logs[-1]
        assert entry["event_type"] == "transaction_rejected"
        assert entry["log_level"] == "warning"
        assert entry["error_code"] == "insufficient_funds"
        assert entry["details"]["kind"] == "Pagamento de Boleto"

    def test_storage_fallback_is_logged(self):
        settings = LedgerSettings(
            _env_file=None, storage_failure_policy=StorageFailurePolicy.RESET
        )
        with capture_logs() as logs:
            Ledger("Joana", InMemoryStore({"saldo": "{bad"}), settings=settings)

        assert audit_types(logs) == ["storage_fallback", "ledger_hydrated"]
        assert logs[0]["log_level"] == "error"
        assert logs[0]["details"] == {"key": "saldo"}

    def test_write_failure_is_logged(self, settings, failing_store):
        store = failing_store({"transacoes"})
        with capture_logs() as logs:
            ledger = Ledger("Joana", store, settings=settings)
            with pytest.raises(StorageWriteError):
                ledger.record_transaction(Transaction(
                    kind=TransactionKind.DEPOSIT, amount=Decimal("100"), date=datetime(2024, 1, 5),
                ))

        assert audit_types(logs) == ["ledger_hydrated", "balance_credited", "system_error"]
        entry = logs[-1]
        assert entry["log_level"] == "error"
        assert entry["correlation_id"] == str(ledger.correlation_id)
        assert entry["error_message"] == "Disk full while writing 'transacoes'"
        assert entry["details"] == {
            "owner": "Joana",
            "key": "transacoes",
            "operation": "record_transaction",
        }

    def test_failed_balance_write_is_not_reported_as_credit(self, settings, failing_store):
        with capture_logs() as logs:
            ledger = Ledger("Joana", failing_store({"saldo"}), settings=settings)
            with pytest.raises(StorageWriteError):
                ledger.credit(50)

        assert audit_types(logs) == ["ledger_hydrated", "system_error"]
        assert logs[-1]["details"]["operation"] == "credit"
