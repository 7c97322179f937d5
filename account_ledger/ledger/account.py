"""
Account Ledger

The ledger owns one account's balance and transaction list. It:
1. Loads both from the key-value store when constructed
2. Validates every debit/credit before touching anything
3. Normalizes transaction signs (debits are stored negative)
4. Persists balance and transactions after each mutation
5. Builds the month-grouped history on demand

IMPORTANT: A refused transaction leaves balance, transaction list and
store exactly as they were. Validation always runs before mutation.

Not safe for concurrent use. Callers sharing a ledger between threads
must serialize record_transaction themselves.
"""

import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from account_ledger.audit import AuditLogger, create_correlation_id
from account_ledger.config import LedgerSettings, StorageFailurePolicy, get_settings
from account_ledger.ledger.exceptions import (
    InsufficientFunds,
    InvalidAmount,
    InvalidTransactionKind,
    LedgerError,
)
from account_ledger.ledger.labels import format_month_label
from account_ledger.models.transaction import (
    Transaction,
    TransactionGroup,
    TransactionKind,
)
from account_ledger.services.storage import CorruptValueError, KeyValueStore, StorageError


Amount = Union[Decimal, int, float, str]

_BALANCE_ADAPTER = TypeAdapter(Decimal)
_TRANSACTIONS_ADAPTER = TypeAdapter(list[Transaction])


class Ledger:
    """
    A single account: owner, balance and transaction history.

    Usage:
        ledger = Ledger("Joana da Silva Oliveira", JsonFileStore("conta.json"))
        ledger.record_transaction(Transaction(
            kind=TransactionKind.DEPOSIT, amount=Decimal("100"), date=datetime.now(),
        ))
        ledger.get_grouped_transactions()
    """

    def __init__(
        self,
        owner: str,
        store: KeyValueStore,
        *,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Create the ledger and load its stored state.

        Args:
            owner: Account holder name, fixed for the ledger's lifetime
            store: Key-value store holding balance and transactions
            audit_logger: Where audit events go (a local one if None)
            settings: Storage keys, locale and failure policy
            clock: Source of the current time for get_access_date
            correlation_id: Stamped on every audit event of this ledger

        Raises:
            ValueError: If owner is blank
            StorageError: If stored state is unreadable and the
                         failure policy is "fatal"
        """
        if not owner or not owner.strip():
            raise ValueError("Account owner name is required")

        self._owner = owner
        self._store = store
        self._settings = settings or get_settings()
        self._audit = audit_logger or AuditLogger()
        self._clock = clock or datetime.now
        self._correlation_id = correlation_id or create_correlation_id()

        self._balance: Decimal = self._load(
            self._settings.balance_key, Decimal("0"), self._decode_balance
        )
        self._transactions: list[Transaction] = self._load(
            self._settings.transactions_key, [], self._decode_transactions
        )

        self._audit.log_ledger_hydrated(
            owner=self._owner,
            balance=self._balance,
            transaction_count=len(self._transactions),
            correlation_id=self._correlation_id,
        )

    # =========================================================================
    # HYDRATION
    # =========================================================================

    def _load(self, key: str, default: Any, decoder: Callable[[Any], Any]) -> Any:
        """Read and decode one key, applying the storage failure policy."""
        try:
            raw = self._store.get(key)
            if raw is None:
                return default
            return decoder(raw)
        except StorageError as e:
            if self._settings.storage_failure_policy != StorageFailurePolicy.RESET:
                raise
            self._audit.log_storage_fallback(
                owner=self._owner,
                key=key,
                error_message=str(e),
                correlation_id=self._correlation_id,
            )
            return default

    @staticmethod
    def _decode_balance(raw: Any) -> Decimal:
        try:
            balance = _BALANCE_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise CorruptValueError(f"Stored balance is not a number: {e}")
        if balance < 0:
            raise CorruptValueError(f"Stored balance is negative: {balance}")
        return balance

    @staticmethod
    def _decode_transactions(raw: Any) -> list[Transaction]:
        # Older stores double-encoded the list as a JSON string
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise CorruptValueError(f"Stored transactions are not valid JSON: {e}")

        try:
            transactions = _TRANSACTIONS_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise CorruptValueError(f"Stored transactions are malformed: {e}")

        for tx in transactions:
            if not isinstance(tx.kind, TransactionKind):
                raise CorruptValueError(f"Stored transaction has unknown kind: {tx.kind!r}")
        return transactions

    def _persist(self, key: str, value: Any, operation: str) -> None:
        """Write one key; write failures are audited and re-raised."""
        try:
            self._store.set(key, value)
        except StorageError as e:
            self._audit.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"owner": self._owner, "key": key, "operation": operation},
                correlation_id=self._correlation_id,
            )
            raise

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id

    def get_owner(self) -> str:
        """Account holder name."""
        return self._owner

    def get_balance(self) -> Decimal:
        """Current balance."""
        return self._balance

    def get_access_date(self) -> datetime:
        """Current date and time, shown as the account's access date."""
        return self._clock()

    def get_transactions(self) -> list[Transaction]:
        """Recorded transactions in insertion order (a copy)."""
        return list(self._transactions)

    def get_grouped_transactions(self) -> list[TransactionGroup]:
        """
        Transaction history grouped by calendar month.

        Groups are ordered newest month first; inside a group the newest
        transaction comes first. The ledger's own list is not reordered.
        Transactions with equal dates keep their recording order.
        """
        ordered = sorted(self._transactions, key=lambda tx: tx.date, reverse=True)

        groups: list[TransactionGroup] = []
        current_label: Optional[str] = None

        for tx in ordered:
            label = format_month_label(tx.date, self._settings.display_locale)
            if label != current_label:
                current_label = label
                groups.append(TransactionGroup(label=label))
            groups[-1].transactions.append(tx)

        return groups

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def debit(self, amount: Amount) -> None:
        """
        Take money out of the account.

        Raises:
            InvalidAmount: If amount is not greater than zero
            InsufficientFunds: If amount exceeds the balance
        """
        value = _to_decimal(amount)
        if value <= 0:
            raise InvalidAmount(value, "Debit amount must be greater than zero")
        if value > self._balance:
            raise InsufficientFunds(requested=value, available=self._balance)

        new_balance = self._balance - value
        self._persist(self._settings.balance_key, new_balance, "debit")
        self._balance = new_balance

        self._audit.log_balance_debited(
            owner=self._owner,
            amount=value,
            new_balance=self._balance,
            correlation_id=self._correlation_id,
        )

    def credit(self, amount: Amount) -> None:
        """
        Put money into the account.

        Raises:
            InvalidAmount: If amount is not greater than zero
        """
        value = _to_decimal(amount)
        if value <= 0:
            raise InvalidAmount(value, "Deposit amount must be greater than zero")

        new_balance = self._balance + value
        self._persist(self._settings.balance_key, new_balance, "credit")
        self._balance = new_balance

        self._audit.log_balance_credited(
            owner=self._owner,
            amount=value,
            new_balance=self._balance,
            correlation_id=self._correlation_id,
        )

    def record_transaction(self, transaction: Transaction) -> Transaction:
        """
        Apply a transaction to the balance and add it to the history.

        Deposits credit the balance and are stored as given. Transfers
        and bill payments debit it and are stored with a negative amount.

        Returns:
            The transaction as stored (sign-normalized)

        Raises:
            InvalidTransactionKind: If the kind is not recognized
            InvalidAmount: If the amount is not greater than zero
            InsufficientFunds: If a debit exceeds the balance
            StorageError: If a write fails. The balance and history keep only
                         what reached the store
        """
        try:
            recorded = self._apply(transaction)
        except LedgerError as e:
            self._audit.log_transaction_rejected(
                owner=self._owner,
                kind=transaction.kind_label,
                amount=transaction.amount,
                error_code=e.code,
                error_message=str(e),
                correlation_id=self._correlation_id,
            )
            raise

        updated = self._transactions + [recorded]
        self._persist(
            self._settings.transactions_key,
            [tx.to_storage_dict() for tx in updated],
            "record_transaction",
        )
        self._transactions = updated

        self._audit.log_transaction_recorded(
            owner=self._owner,
            kind=recorded.kind_label,
            amount=recorded.amount,
            date=recorded.date,
            correlation_id=self._correlation_id,
        )
        return recorded

    def _apply(self, transaction: Transaction) -> Transaction:
        """Mutate the balance for one transaction and return its stored form."""
        kind = transaction.kind
        if not isinstance(kind, TransactionKind):
            raise InvalidTransactionKind(kind)

        if kind == TransactionKind.DEPOSIT:
            self.credit(transaction.amount)
            return transaction

        if kind.is_debit:
            self.debit(transaction.amount)
            return transaction.model_copy(update={"amount": -transaction.amount})

        raise InvalidTransactionKind(kind)

    def __repr__(self) -> str:
        return (
            f"Ledger(owner={self._owner!r}, balance={self._balance}, "
            f"transactions={len(self._transactions)})"
        )


def _to_decimal(amount: Amount) -> Decimal:
    """Coerce an amount to Decimal; floats go through str to avoid binary noise."""
    if isinstance(amount, bool):
        raise InvalidAmount(Decimal("0"), f"Amount must be a number, got {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            raise InvalidAmount(Decimal("0"), f"Amount must be a number, got {amount!r}")
    if not value.is_finite():
        raise InvalidAmount(value, f"Amount must be finite, got {amount!r}")
    return value
