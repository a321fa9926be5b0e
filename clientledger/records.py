"""
records.py - CSV Transaction Input

Reads a transaction CSV and yields TransactionRecords in file order.

Expected layout:

    type,client,tx,amount
    deposit,1,1,1.0
    withdrawal,1,2,0.5
    dispute,1,1,

Columns are located by header name, fields are trimmed, blank lines are
skipped. Any row that cannot be parsed raises ParseError tagged with its
line number; reading stops at the first bad row.
"""

from __future__ import annotations
import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, TextIO, Union

from .amount import Amount
from .core import (
    MAX_CLIENT_ID,
    MAX_TRANSACTION_ID,
    TransactionKind,
    TransactionRecord,
)
from .errors import InputError, ParseError


logger = logging.getLogger(__name__)

INPUT_HEADER = ("type", "client", "tx", "amount")
REQUIRED_COLUMNS = ("type", "client", "tx")

_KINDS_BY_NAME: Dict[str, TransactionKind] = {kind.value: kind for kind in TransactionKind}


# ============================================================================
# FIELD PARSERS
# ============================================================================

def parse_kind(text: str) -> TransactionKind:
    """Exact, case-sensitive match against the transaction type names."""
    try:
        return _KINDS_BY_NAME[text]
    except KeyError:
        raise ParseError(f"unknown transaction type: {text!r}") from None


def parse_id(name: str, text: str, maximum: int) -> int:
    """Parse an unsigned integer id no larger than maximum."""
    if not text.isdigit() or not text.isascii():
        raise ParseError(f"invalid {name}: {text!r}")
    value = int(text)
    if value > maximum:
        raise ParseError(f"{name} out of range: {text}")
    return value


# ============================================================================
# ROW PARSING
# ============================================================================

class ColumnMap:
    """
    Positions of the known columns, built from a header row.

    Raises:
        ParseError: If the header is missing a required column or repeats one.
    """

    def __init__(self, header: Sequence[str]):
        names = [name.strip() for name in header]
        self.width = len(names)
        self.positions: Dict[str, int] = {}
        for i, name in enumerate(names):
            if name in self.positions:
                raise ParseError(f"duplicate column in header: {name!r}")
            self.positions[name] = i
        missing = [c for c in REQUIRED_COLUMNS if c not in self.positions]
        if missing:
            raise ParseError(
                f"header is missing column(s): {', '.join(missing)}",
                details={'header': names},
            )

    def field(self, row: Sequence[str], name: str) -> Optional[str]:
        """Trimmed value of a column, or None if the header has no such column."""
        i = self.positions.get(name)
        if i is None:
            return None
        return row[i].strip()


def parse_row(row: Sequence[str], columns: ColumnMap) -> TransactionRecord:
    """
    Convert one CSV row into a TransactionRecord.

    Raises:
        ParseError: On wrong field count, unknown type, invalid id, or a
                    missing or invalid amount.
    """
    if len(row) != columns.width:
        raise ParseError(
            f"expected {columns.width} fields, found {len(row)}",
            details={'row': list(row)},
        )

    kind = parse_kind(columns.field(row, "type"))
    client = parse_id("client", columns.field(row, "client"), MAX_CLIENT_ID)
    tx = parse_id("tx", columns.field(row, "tx"), MAX_TRANSACTION_ID)
    amount_text = columns.field(row, "amount") or ""

    if kind.carries_amount:
        if not amount_text:
            raise ParseError(f"{kind.value} requires an amount")
        return TransactionRecord(kind, client, tx, Amount.parse(amount_text))

    if amount_text:
        # Validated, then dropped: only deposits and withdrawals carry amounts
        Amount.parse(amount_text)
    return TransactionRecord(kind, client, tx)


def parse_rows(rows: Iterable[List[str]]) -> Iterator[TransactionRecord]:
    """
    Parse header and data rows from a csv.reader.

    Line numbers in errors are 1-based and count the header. An input with
    no header row yields nothing.
    """
    columns: Optional[ColumnMap] = None
    for line, row in enumerate(rows, start=1):
        if not row or all(not field.strip() for field in row):
            continue
        try:
            if columns is None:
                columns = ColumnMap(row)
                continue
            yield parse_row(row, columns)
        except InputError as e:
            raise e.at_line(line) from e


# ============================================================================
# FILE READING
# ============================================================================

def iter_records(stream: TextIO) -> Iterator[TransactionRecord]:
    """Yield records from an open text stream."""
    try:
        yield from parse_rows(csv.reader(stream))
    except csv.Error as e:
        raise ParseError(f"malformed csv: {e}") from e


def read_records(path: Union[str, Path]) -> Iterator[TransactionRecord]:
    """
    Open a transaction CSV and yield its records lazily.

    The file is closed when the generator is exhausted or closed.

    Raises:
        InputError: If the file cannot be opened or decoded.
        ParseError: If any row fails to parse.
    """
    path = Path(path)
    try:
        f = open(path, newline="", encoding="utf-8-sig")
    except OSError as e:
        raise InputError(f"cannot open {path}: {e.strerror or e}", details={'path': str(path)}) from e

    logger.debug("Reading transactions from %s", path)
    count = 0
    with f:
        try:
            for record in iter_records(f):
                count += 1
                yield record
        except UnicodeDecodeError as e:
            raise InputError(f"cannot decode {path}: {e}", details={'path': str(path)}) from e
    logger.info("Read %d transaction records from %s", count, path)
