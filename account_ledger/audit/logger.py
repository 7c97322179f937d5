"""
Audit Logger

DESIGN DECISION: Every balance mutation and every refused transaction
is logged. This provides:
1. Traceability of the balance
2. Debugging capability when a transaction is refused
3. Visibility of storage fallbacks

The audit logger:
- Writes structured JSON lines through structlog
- Is synchronous, like the ledger it serves
- Supports correlation IDs to trace the events of one ledger instance
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from account_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service for the ledger.

    Each event is written at the log level matching its severity.
    """

    def __init__(self, logger_name: str = "account_ledger.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> AuditEvent:
        """Log an audit event and return it."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return event

    def log_ledger_hydrated(
        self,
        owner: str,
        balance: Decimal,
        transaction_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log that a ledger finished loading its stored state."""
        event = AuditEventBuilder.ledger_hydrated(
            owner=owner,
            balance=balance,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_balance_credited(
        self,
        owner: str,
        amount: Decimal,
        new_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        """Log a credit."""
        event = AuditEventBuilder.balance_credited(
            owner=owner,
            amount=amount,
            new_balance=new_balance,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_balance_debited(
        self,
        owner: str,
        amount: Decimal,
        new_balance: Decimal,
        correlation_id: UUID,
    ) -> None:
        """Log a debit."""
        event = AuditEventBuilder.balance_debited(
            owner=owner,
            amount=amount,
            new_balance=new_balance,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_transaction_recorded(
        self,
        owner: str,
        kind: str,
        amount: Decimal,
        date: datetime,
        correlation_id: UUID,
    ) -> None:
        """Log an accepted transaction."""
        event = AuditEventBuilder.transaction_recorded(
            owner=owner,
            kind=kind,
            amount=amount,
            date=date,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_transaction_rejected(
        self,
        owner: str,
        kind: str,
        amount: Decimal,
        error_code: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a refused transaction."""
        event = AuditEventBuilder.transaction_rejected(
            owner=owner,
            kind=kind,
            amount=amount,
            error_code=error_code,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_storage_fallback(
        self,
        owner: str,
        key: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log that a stored value was discarded in favour of its default."""
        event = AuditEventBuilder.storage_fallback(
            owner=owner,
            key=key,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    The ledger takes one at construction and stamps it on every event.
    """
    return uuid4()
