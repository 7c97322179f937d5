"""Account ledger package."""

from account_ledger.ledger.account import Ledger
from account_ledger.ledger.exceptions import (
    InsufficientFunds,
    InvalidAmount,
    InvalidTransactionKind,
    LedgerError,
)
from account_ledger.ledger.labels import format_month_label

__all__ = [
    "Ledger",
    # Exceptions
    "InsufficientFunds",
    "InvalidAmount",
    "InvalidTransactionKind",
    "LedgerError",
    # Presentation
    "format_month_label",
]
