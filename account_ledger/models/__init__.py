"""
Data Models Package

This package contains all Pydantic models used by the Account Ledger.
All data flowing through the ledger must conform to these schemas.
"""

from account_ledger.models.transaction import (
    Transaction,
    TransactionGroup,
    TransactionKind,
)
from account_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "Transaction",
    "TransactionGroup",
    "TransactionKind",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
