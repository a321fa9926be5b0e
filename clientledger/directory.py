"""
directory.py - Ledger Directory

LedgerDirectory maps client ids to AccountLedgers, routes each incoming
record to its account (creating the account on first sight), and renders
the snapshot table.

A directory is an ordinary object owned by whoever runs the pipeline;
there is no module-level registry.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Optional, TextIO

from .account import AccountLedger
from .core import (
    OUTPUT_HEADER,
    AccountSnapshot,
    ApplyResult,
    ClientId,
    TransactionRecord,
)
from .errors import OutputError


class LedgerDirectory:
    """
    All accounts seen during one run.

    Accounts are kept in first-seen order. Rendering uses that order unless
    sort_accounts is requested, in which case accounts are ordered by id.

    Example:
        directory = LedgerDirectory()
        directory.apply(deposit(1, 1, Amount.parse("1.5")))
        directory.render_all()    # ["client,available,held,total,locked", "1,1.5,0,1.5,false"]
    """

    def __init__(self):
        self._accounts: Dict[ClientId, AccountLedger] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, client: ClientId) -> bool:
        return client in self._accounts

    def accounts(self) -> List[ClientId]:
        """Known client ids, sorted."""
        return sorted(self._accounts)

    def get_account(self, client: ClientId) -> Optional[AccountLedger]:
        """Return the account for a client, or None if it has never been seen."""
        return self._accounts.get(client)

    # ========================================================================
    # ROUTING (Mutating)
    # ========================================================================

    def apply(self, record: TransactionRecord) -> ApplyResult:
        """
        Route a record to its client's account.

        Unknown clients are always valid: a new empty account is created.

        Returns:
            The account's ApplyResult for the record.
        """
        account = self._accounts.get(record.client)
        if account is None:
            account = AccountLedger(record.client)
            self._accounts[record.client] = account
        return account.add_transaction(record)

    def apply_all(self, records: Iterable[TransactionRecord]) -> int:
        """
        Apply records in order.

        Returns:
            Number of records accepted.
        """
        accepted = 0
        for record in records:
            if self.apply(record) is ApplyResult.ACCEPTED:
                accepted += 1
        return accepted

    # ========================================================================
    # RENDERING (Read-only)
    # ========================================================================

    def _ordered(self, sort_accounts: bool) -> Iterator[AccountLedger]:
        if sort_accounts:
            for client in sorted(self._accounts):
                yield self._accounts[client]
        else:
            yield from self._accounts.values()

    def snapshots(self, sort_accounts: bool = False) -> List[AccountSnapshot]:
        """Fresh snapshot of every account."""
        return [account.snapshot() for account in self._ordered(sort_accounts)]

    def render_all(self, sort_accounts: bool = False) -> List[str]:
        """Header line followed by one line per account."""
        lines = [",".join(OUTPUT_HEADER)]
        lines.extend(str(snapshot) for snapshot in self.snapshots(sort_accounts))
        return lines

    def write_all(self, stream: TextIO, sort_accounts: bool = False) -> int:
        """
        Write the rendered table to a text stream.

        Returns:
            Number of account lines written.

        Raises:
            OutputError: If the stream cannot be written or flushed.
        """
        lines = self.render_all(sort_accounts)
        try:
            for line in lines:
                stream.write(line + "\n")
            stream.flush()
        except (OSError, ValueError) as e:
            # ValueError: write to a closed file
            raise OutputError(f"failed to write snapshot table: {e}") from e
        return len(lines) - 1
