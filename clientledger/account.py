"""
account.py - Per-Client Account Ledger

An AccountLedger holds the append-only history of accepted transactions for
one client. It stores no balances: every snapshot() replays the history from
the start, so the result is a pure function of the entries.

Acceptance (on append):
    - deposit / withdrawal:     amount is non-zero
    - dispute:                  a deposit or withdrawal with that tx id exists
    - resolve / chargeback:     a dispute of that tx id exists

Replay (on snapshot):
    - deposit:      available += amount
    - withdrawal:   available -= amount, unless funds are short or the account is locked
    - dispute:      move the disputed amount from available to held
                    (a disputed withdrawal moves a negative amount)
    - resolve:      move it back from held to available
    - chargeback:   drop it from held and lock the account

Rejected appends and blocked withdrawals are silent no-ops.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .amount import Amount
from .core import (
    AccountSnapshot,
    ApplyResult,
    ClientId,
    LedgerEntry,
    TransactionId,
    TransactionKind,
    TransactionRecord,
)


_FUNDING_KINDS = (TransactionKind.DEPOSIT, TransactionKind.WITHDRAWAL)


class AccountLedger:
    """
    Transaction history and balance derivation for one client.

    Thread Safety:
        Not thread-safe. A run owns its accounts exclusively.

    Example:
        account = AccountLedger(1)
        account.add_transaction(deposit(1, 1, Amount.parse("10")))
        account.add_transaction(dispute(1, 1))
        str(account.snapshot())    # "1,0,10,10,false"
    """

    def __init__(self, client: ClientId):
        self.client = client
        self._entries: List[LedgerEntry] = []

    @property
    def history(self) -> Tuple[LedgerEntry, ...]:
        """Accepted entries in acceptance order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AccountLedger(client={self.client}, entries={len(self._entries)})"

    # ========================================================================
    # ACCEPTANCE (Mutating)
    # ========================================================================

    def _has_entry(self, tx: TransactionId, kinds: Iterable[TransactionKind]) -> bool:
        kinds = tuple(kinds)
        return any(e.tx == tx and e.kind in kinds for e in self._entries)

    def _accepts(self, entry: LedgerEntry) -> bool:
        if entry.kind in _FUNDING_KINDS:
            return not entry.amount.is_zero()
        if entry.kind is TransactionKind.DISPUTE:
            return self._has_entry(entry.tx, _FUNDING_KINDS)
        # resolve / chargeback
        return self._has_entry(entry.tx, (TransactionKind.DISPUTE,))

    def add_transaction(self, transaction: Union[TransactionRecord, LedgerEntry]) -> ApplyResult:
        """
        Offer a transaction to this account.

        Args:
            transaction: A record for this client, or an already stripped entry.

        Returns:
            ApplyResult.ACCEPTED if appended to history,
            ApplyResult.REJECTED if dropped by the acceptance rules.

        Raises:
            ValueError: If a record belongs to a different client.
        """
        if isinstance(transaction, TransactionRecord):
            if transaction.client != self.client:
                raise ValueError(
                    f"Record for client {transaction.client} offered to client {self.client}"
                )
            entry = transaction.to_entry()
        else:
            entry = transaction

        if not self._accepts(entry):
            return ApplyResult.REJECTED
        self._entries.append(entry)
        return ApplyResult.ACCEPTED

    # ========================================================================
    # SNAPSHOT (Read-only)
    # ========================================================================

    def snapshot(self, upto: Optional[int] = None) -> AccountSnapshot:
        """
        Derive balances by replaying history.

        Args:
            upto: Replay only the first `upto` entries (default: all of them).

        Returns:
            AccountSnapshot for this client.
        """
        entries = self._entries if upto is None else self._entries[:upto]

        # First deposit/withdrawal per tx id is the dispute target
        originals: Dict[TransactionId, LedgerEntry] = {}
        for e in entries:
            if e.kind in _FUNDING_KINDS:
                originals.setdefault(e.tx, e)

        available = Amount.zero()
        held = Amount.zero()
        locked = False
        disputed: Dict[TransactionId, Amount] = {}

        for e in entries:
            if e.kind is TransactionKind.DEPOSIT:
                available += e.amount

            elif e.kind is TransactionKind.WITHDRAWAL:
                if available >= e.amount and not locked:
                    available -= e.amount

            elif e.kind is TransactionKind.DISPUTE:
                original = originals.get(e.tx)
                if original is None:
                    continue
                amount = original.amount
                if original.kind is TransactionKind.WITHDRAWAL:
                    amount = -amount
                disputed[e.tx] = amount
                available -= amount
                held += amount

            elif e.kind is TransactionKind.RESOLVE:
                amount = disputed.pop(e.tx, None)
                if amount is not None:
                    held -= amount
                    available += amount

            elif e.kind is TransactionKind.CHARGEBACK:
                amount = disputed.pop(e.tx, None)
                if amount is not None:
                    locked = True
                    held -= amount

        return AccountSnapshot(self.client, available, held, locked)
