"""Ledger validation errors."""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for ledger operations."""

    code = "ledger_error"


class InvalidAmount(LedgerError):
    """Debit or credit requested with a non-positive amount."""

    code = "invalid_amount"

    def __init__(self, amount: Decimal, message: str):
        self.amount = amount
        super().__init__(message)


class InsufficientFunds(LedgerError):
    """Debit larger than the available balance."""

    code = "insufficient_funds"

    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}"
        )


class InvalidTransactionKind(LedgerError):
    """Transaction kind is not one the ledger knows how to apply."""

    code = "invalid_transaction_kind"

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Invalid transaction kind: {kind!r}")
