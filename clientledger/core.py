"""
Core types for the client ledger.

This module provides the data structures shared by every layer:
1. Enums: TransactionKind and ApplyResult
2. Immutable records: TransactionRecord (input), LedgerEntry (retained history)
3. AccountSnapshot: derived balances of one account
4. Type aliases and id range constants
5. Record factories: deposit(), withdrawal(), dispute(), resolve(), chargeback()

All structures here are frozen. Balances are never stored on an account;
they are derived by replaying history (see account.py).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .amount import Amount


# ============================================================================
# CONSTANTS
# ============================================================================

# Client ids are unsigned 16-bit, transaction ids unsigned 32-bit.
MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1

OUTPUT_HEADER = ("client", "available", "held", "total", "locked")


# ============================================================================
# TYPE ALIASES
# ============================================================================

ClientId = int
TransactionId = int


# ============================================================================
# ENUMS
# ============================================================================

class TransactionKind(Enum):
    """
    Kind of a transaction record. Values are the input spellings.

    DEPOSIT and WITHDRAWAL carry an amount and introduce a transaction id.
    DISPUTE, RESOLVE and CHARGEBACK reference an earlier transaction id.
    """
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionKind.DEPOSIT, TransactionKind.WITHDRAWAL)


class ApplyResult(Enum):
    """
    Outcome of offering a record to an account.

    ACCEPTED: The record was appended to the account history.
    REJECTED: The record was dropped (zero amount or no valid predecessor).
              This is normal policy, not a fault.
    """
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# ============================================================================
# RECORDS
# ============================================================================

def _check_id(name: str, value: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value)}")
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} out of range: {value}")


def _check_amount(kind: TransactionKind, amount: Optional[Amount]) -> None:
    if kind.carries_amount:
        if not isinstance(amount, Amount):
            raise ValueError(f"{kind.value} requires an Amount, got {amount!r}")
    elif amount is not None:
        raise ValueError(f"{kind.value} must not carry an amount")


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """
    One parsed input instruction.

    Attributes:
        kind: What the instruction does.
        client: Account the instruction applies to.
        tx: Transaction id introduced (deposit/withdrawal) or referenced.
        amount: Amount for deposit/withdrawal, None otherwise.
    """
    kind: TransactionKind
    client: ClientId
    tx: TransactionId
    amount: Optional[Amount] = None

    def __post_init__(self):
        if not isinstance(self.kind, TransactionKind):
            raise TypeError(f"kind must be TransactionKind, got {type(self.kind)}")
        _check_id("client", self.client, MAX_CLIENT_ID)
        _check_id("tx", self.tx, MAX_TRANSACTION_ID)
        _check_amount(self.kind, self.amount)

    def to_entry(self) -> LedgerEntry:
        """Strip the client id, leaving what an account retains."""
        return LedgerEntry(self.kind, self.tx, self.amount)


@dataclass(frozen=True, slots=True)
class LedgerEntry:
    """
    A transaction retained in one account's history.

    Attributes:
        kind: Transaction kind.
        tx: Transaction id (own id for deposit/withdrawal, referenced id otherwise).
        amount: Amount for deposit/withdrawal, None otherwise.
    """
    kind: TransactionKind
    tx: TransactionId
    amount: Optional[Amount] = None

    def __post_init__(self):
        _check_amount(self.kind, self.amount)

    def __repr__(self) -> str:
        if self.amount is None:
            return f"LedgerEntry({self.kind.value} tx={self.tx})"
        return f"LedgerEntry({self.kind.value} tx={self.tx} {self.amount})"


# ============================================================================
# SNAPSHOT
# ============================================================================

@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """
    Balances of one account, derived from its history.

    Attributes:
        client: Account id.
        available: Funds free to withdraw (may be negative after a dispute).
        held: Funds frozen by open disputes.
        locked: True once a chargeback has been applied.

    total is always available + held and is not stored.
    """
    client: ClientId
    available: Amount
    held: Amount
    locked: bool

    @property
    def total(self) -> Amount:
        return self.available + self.held

    def to_row(self) -> List[str]:
        """Output fields in OUTPUT_HEADER order."""
        return [
            str(self.client),
            self.available.format(),
            self.held.format(),
            self.total.format(),
            "true" if self.locked else "false",
        ]

    def __str__(self) -> str:
        return ",".join(self.to_row())


# ============================================================================
# RECORD FACTORIES
# ============================================================================

def deposit(client: ClientId, tx: TransactionId, amount: Amount) -> TransactionRecord:
    """Create a deposit record."""
    return TransactionRecord(TransactionKind.DEPOSIT, client, tx, amount)


def withdrawal(client: ClientId, tx: TransactionId, amount: Amount) -> TransactionRecord:
    """Create a withdrawal record."""
    return TransactionRecord(TransactionKind.WITHDRAWAL, client, tx, amount)


def dispute(client: ClientId, tx: TransactionId) -> TransactionRecord:
    """Create a dispute of an earlier deposit or withdrawal."""
    return TransactionRecord(TransactionKind.DISPUTE, client, tx)


def resolve(client: ClientId, tx: TransactionId) -> TransactionRecord:
    """Create a resolution of an open dispute."""
    return TransactionRecord(TransactionKind.RESOLVE, client, tx)


def chargeback(client: ClientId, tx: TransactionId) -> TransactionRecord:
    """Create a chargeback of an open dispute."""
    return TransactionRecord(TransactionKind.CHARGEBACK, client, tx)
