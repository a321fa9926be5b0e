"""
test_directory.py - Tests for LedgerDirectory routing and rendering
"""

import io
import pytest

from clientledger import (
    Amount, ApplyResult, LedgerDirectory, OutputError,
    deposit, withdrawal, dispute, resolve, chargeback,
)


def A(text: str) -> Amount:
    return Amount.parse(text)


class TestRouting:
    """Tests for apply() and lazy account creation."""

    def test_new_client_creates_account(self, directory):
        assert 1 not in directory
        directory.apply(deposit(1, 1, A("1")))
        assert 1 in directory
        assert len(directory) == 1

    def test_rejected_record_still_creates_account(self, directory):
        """Unknown accounts are always valid, even for a dropped record."""
        assert directory.apply(dispute(5, 1)) is ApplyResult.REJECTED
        assert 5 in directory
        assert str(directory.get_account(5).snapshot()) == "5,0,0,0,false"

    def test_records_routed_by_client(self, directory):
        directory.apply(deposit(1, 1, A("1")))
        directory.apply(deposit(2, 2, A("2")))
        directory.apply(withdrawal(1, 3, A("0.25")))
        assert str(directory.get_account(1).snapshot()) == "1,0.75,0,0.75,false"
        assert str(directory.get_account(2).snapshot()) == "2,2,0,2,false"

    def test_dispute_is_scoped_to_its_client(self, directory):
        """A dispute naming another client's transaction is dropped."""
        directory.apply(deposit(1, 1, A("10")))
        assert directory.apply(dispute(2, 1)) is ApplyResult.REJECTED
        assert str(directory.get_account(1).snapshot()) == "1,10,0,10,false"

    def test_get_unknown_account(self, directory):
        assert directory.get_account(42) is None

    def test_apply_all_counts_accepted(self, directory):
        accepted = directory.apply_all([
            deposit(1, 1, A("5")),
            deposit(1, 2, A("0")),
            dispute(1, 1),
            resolve(1, 7),
            chargeback(1, 1),
        ])
        assert accepted == 3
        assert str(directory.get_account(1).snapshot()) == "1,0,0,0,true"

    def test_accounts_sorted(self, directory):
        for client in (9, 3, 7):
            directory.apply(deposit(client, client, A("1")))
        assert directory.accounts() == [3, 7, 9]


class TestRendering:
    """Tests for render_all() and write_all()."""

    def test_empty_directory_renders_header(self, directory):
        assert directory.render_all() == ["client,available,held,total,locked"]

    def test_insertion_order_by_default(self, directory):
        directory.apply(deposit(2, 1, A("2")))
        directory.apply(deposit(1, 2, A("1")))
        assert directory.render_all() == [
            "client,available,held,total,locked",
            "2,2,0,2,false",
            "1,1,0,1,false",
        ]

    def test_sorted_order(self, directory):
        directory.apply(deposit(2, 1, A("2")))
        directory.apply(deposit(1, 2, A("1")))
        assert directory.render_all(sort_accounts=True)[1:] == [
            "1,1,0,1,false",
            "2,2,0,2,false",
        ]

    def test_snapshots_are_fresh(self, directory):
        directory.apply(deposit(1, 1, A("3")))
        first = directory.snapshots()
        directory.apply(dispute(1, 1))
        second = directory.snapshots()
        assert str(first[0]) == "1,3,0,3,false"
        assert str(second[0]) == "1,0,3,3,false"

    def test_write_all(self, directory):
        directory.apply(deposit(1, 1, A("1.5")))
        out = io.StringIO()
        assert directory.write_all(out) == 1
        assert out.getvalue() == "client,available,held,total,locked\n1,1.5,0,1.5,false\n"

    def test_write_to_closed_stream_raises(self, directory):
        directory.apply(deposit(1, 1, A("1")))
        out = io.StringIO()
        out.close()
        with pytest.raises(OutputError):
            directory.write_all(out)

    def test_write_os_error_raises(self, directory):
        class BrokenStream(io.StringIO):
            def write(self, s):
                raise OSError("disk full")

        with pytest.raises(OutputError, match="disk full"):
            directory.write_all(BrokenStream())

    def test_directories_are_independent(self):
        one = LedgerDirectory()
        two = LedgerDirectory()
        one.apply(deposit(1, 1, A("1")))
        assert len(two) == 0
