"""
conftest.py - Shared pytest fixtures for clientledger tests

Provides common fixtures used across unit, functional and conformance tests:
- Accounts (empty, funded)
- Directories
- CSV input files written to a temporary directory
"""

import pytest
from pathlib import Path

from clientledger import (
    AccountLedger, Amount, LedgerDirectory,
    deposit,
)


# =============================================================================
# ACCOUNT FIXTURES
# =============================================================================

@pytest.fixture
def account():
    """Fresh account for client 1."""
    return AccountLedger(1)


@pytest.fixture
def funded_account(account):
    """Client 1 with a single deposit of 100 (tx 1)."""
    account.add_transaction(deposit(1, 1, Amount.parse("100")))
    return account


@pytest.fixture
def directory():
    """Empty ledger directory."""
    return LedgerDirectory()


# =============================================================================
# CSV FIXTURES
# =============================================================================

SAMPLE_CSV = """\
type, client, tx, amount
deposit, 1, 1, 1.0
deposit, 2, 2, 2.0
deposit, 1, 3, 2.0
withdrawal, 1, 4, 1.5
withdrawal, 2, 5, 3.0
"""


@pytest.fixture
def write_csv(tmp_path):
    """Factory writing CSV text to a temp file and returning its path."""
    def _write(text: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_csv(write_csv):
    """Two clients, one blocked withdrawal."""
    return write_csv(SAMPLE_CSV)
