"""
Core Data Models for Account Ledger

These models define the schemas for everything the ledger records:
1. Enforce type safety at runtime
2. Decode stored JSON into typed records (no generic revivers)
3. Be serializable for storage and logging

DESIGN DECISION: Transactions are frozen. The ledger never mutates the
caller's instance; it stores a sign-normalized copy instead.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Supported transaction kinds.

    Values are the strings persisted under the transactions key, so
    existing stores keep decoding after upgrades.
    """
    DEPOSIT = "Depósito"
    TRANSFER = "Transferência"
    BILL_PAYMENT = "Pagamento de Boleto"

    @property
    def is_debit(self) -> bool:
        """Transfers and bill payments take money out of the account."""
        return self in (TransactionKind.TRANSFER, TransactionKind.BILL_PAYMENT)


# =============================================================================
# TRANSACTION MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    A single account movement.

    The caller creates it with a positive magnitude. Once accepted by the
    ledger the stored amount is positive for deposits and negative for
    transfers and bill payments.

    `kind` also accepts strings outside TransactionKind so that an
    unrecognized kind reaches the ledger and is rejected there.
    Stored records written with the legacy field names
    (tipoTransacao/valor/data) decode as well.
    """
    model_config = ConfigDict(frozen=True)

    kind: Union[TransactionKind, str] = Field(
        ...,
        union_mode="left_to_right",
        validation_alias=AliasChoices("kind", "tipoTransacao"),
        description="Transaction kind"
    )
    amount: Decimal = Field(
        ...,
        validation_alias=AliasChoices("amount", "valor"),
        description="Magnitude on input, signed once recorded"
    )
    date: datetime = Field(
        ...,
        validation_alias=AliasChoices("date", "data"),
        description="When the transaction happened"
    )

    @field_validator('date')
    @classmethod
    def to_local_time(cls, v: datetime) -> datetime:
        """
        Keep every date as naive local time.

        Legacy records carry UTC offsets ("...Z"); they are shifted to the
        local zone so month labels match the account holder's calendar
        and all dates stay comparable.
        """
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def kind_label(self) -> str:
        """Display string for the kind, whether or not it is recognized."""
        if isinstance(self.kind, TransactionKind):
            return self.kind.value
        return str(self.kind)

    def to_storage_dict(self) -> dict:
        """JSON-ready representation written to the key-value store."""
        return self.model_dump(mode="json")


class TransactionGroup(BaseModel):
    """
    Transactions sharing one calendar month and year.

    Computed on demand from the ledger; never persisted.
    """

    label: str = Field(
        ...,
        description="Month and year, e.g. 'janeiro 2024'"
    )
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Newest first"
    )

    @property
    def total(self) -> Decimal:
        """Net movement of the month."""
        return sum((tx.amount for tx in self.transactions), Decimal("0"))
