"""
clientledger - Client Account Ledger Replay

Replays deposits, withdrawals, disputes, resolutions and chargebacks against
per-client account histories and derives available, held and total balances
with exact fixed-point arithmetic.

Usage:
    from clientledger import LedgerDirectory, Amount, deposit, withdrawal, dispute

    directory = LedgerDirectory()
    directory.apply(deposit(1, 1, Amount.parse("1.0")))
    directory.apply(withdrawal(1, 2, Amount.parse("0.5")))
    directory.apply(dispute(1, 1))

    for line in directory.render_all():
        print(line)
    # client,available,held,total,locked
    # 1,-0.5,1,0.5,false
"""

# Amount
from .amount import (
    Amount,
    AMOUNT_ONE,
    DECIMAL_PLACES,
)

# Errors
from .errors import (
    LedgerError,
    InputError,
    ParseError,
    OutputError,
)

# Core types
from .core import (
    TransactionKind,
    ApplyResult,
    TransactionRecord,
    LedgerEntry,
    AccountSnapshot,
    ClientId,
    TransactionId,
    MAX_CLIENT_ID,
    MAX_TRANSACTION_ID,
    OUTPUT_HEADER,
    deposit,
    withdrawal,
    dispute,
    resolve,
    chargeback,
)

# Accounts
from .account import AccountLedger
from .directory import LedgerDirectory

# Input
from .records import (
    INPUT_HEADER,
    parse_row,
    parse_rows,
    iter_records,
    read_records,
)

__all__ = [
    # Amount
    'Amount', 'AMOUNT_ONE', 'DECIMAL_PLACES',
    # Errors
    'LedgerError', 'InputError', 'ParseError', 'OutputError',
    # Core
    'TransactionKind', 'ApplyResult', 'TransactionRecord', 'LedgerEntry',
    'AccountSnapshot', 'ClientId', 'TransactionId',
    'MAX_CLIENT_ID', 'MAX_TRANSACTION_ID', 'OUTPUT_HEADER',
    'deposit', 'withdrawal', 'dispute', 'resolve', 'chargeback',
    # Accounts
    'AccountLedger', 'LedgerDirectory',
    # Input
    'INPUT_HEADER', 'parse_row', 'parse_rows', 'iter_records', 'read_records',
]

__version__ = '1.0.0'
