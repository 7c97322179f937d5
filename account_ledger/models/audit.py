"""
Audit Models for Account Ledger

Every balance mutation and every rejected transaction is logged.
This provides:
1. Traceability of how the balance got where it is
2. Debugging information when a transaction is refused
3. A record of storage fallbacks that discarded stored state

DESIGN DECISION: Audit events are emitted, never edited.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Lifecycle
    LEDGER_HYDRATED = "ledger_hydrated"

    # Balance mutations
    BALANCE_CREDITED = "balance_credited"
    BALANCE_DEBITED = "balance_debited"

    # Transactions
    TRANSACTION_RECORDED = "transaction_recorded"
    TRANSACTION_REJECTED = "transaction_rejected"

    # Storage
    STORAGE_FALLBACK = "storage_fallback"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every ledger mutation or refusal creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    owner: Optional[str] = Field(
        default=None,
        description="Account holder the event relates to"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Ties together all events of one ledger instance"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "owner": self.owner,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.balance_credited(owner, amount, balance, correlation_id)
    """

    @staticmethod
    def ledger_hydrated(
        owner: str,
        balance: Decimal,
        transaction_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_HYDRATED,
            owner=owner,
            correlation_id=correlation_id,
            description=f"Ledger loaded with {transaction_count} transactions",
            details={
                "balance": str(balance),
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def balance_credited(
        owner: str,
        amount: Decimal,
        new_balance: Decimal,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_CREDITED,
            owner=owner,
            correlation_id=correlation_id,
            description=f"Balance credited: {amount}",
            details={
                "amount": str(amount),
                "balance": str(new_balance),
            },
        )

    @staticmethod
    def balance_debited(
        owner: str,
        amount: Decimal,
        new_balance: Decimal,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_DEBITED,
            owner=owner,
            correlation_id=correlation_id,
            description=f"Balance debited: {amount}",
            details={
                "amount": str(amount),
                "balance": str(new_balance),
            },
        )

    @staticmethod
    def transaction_recorded(
        owner: str,
        kind: str,
        amount: Decimal,
        date: datetime,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            owner=owner,
            correlation_id=correlation_id,
            description=f"Transaction recorded: {kind} {amount}",
            details={
                "kind": kind,
                "amount": str(amount),
                "date": date.isoformat(),
            },
        )

    @staticmethod
    def transaction_rejected(
        owner: str,
        kind: str,
        amount: Decimal,
        error_code: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            owner=owner,
            correlation_id=correlation_id,
            description=f"Transaction rejected: {kind}",
            details={
                "kind": kind,
                "amount": str(amount),
            },
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def storage_fallback(
        owner: str,
        key: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_FALLBACK,
            severity=AuditSeverity.ERROR,
            owner=owner,
            correlation_id=correlation_id,
            description=f"Stored value for '{key}' unreadable, using default",
            details={
                "key": key,
            },
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
