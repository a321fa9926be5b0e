"""
cli.py - Command-line entry point

    clientledger transactions.csv > accounts.csv
    python -m clientledger transactions.csv --sort-accounts

Reads the transaction CSV named by the sole positional argument, replays it
into a fresh LedgerDirectory, and writes the account table to stdout.

Exit codes:
    0   success
    1   missing path, unreadable or malformed input, or failed output
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union

from .directory import LedgerDirectory
from .errors import InputError, OutputError
from .records import read_records


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clientledger",
        description="Replay a transaction CSV and print per-client balances.",
    )
    # Optional here so a missing path is reported with exit code 1, not argparse's 2
    parser.add_argument("path", nargs="?", help="transaction CSV file")
    parser.add_argument(
        "--sort-accounts",
        action="store_true",
        help="order output rows by client id instead of first appearance",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="log progress to stderr",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_directory(path: Union[str, Path]) -> LedgerDirectory:
    """
    Build a directory from a transaction CSV.

    Raises:
        InputError: If the file cannot be read or any row is malformed.
    """
    directory = LedgerDirectory()
    accepted = directory.apply_all(read_records(path))
    logger.debug("Accepted %d records across %d accounts", accepted, len(directory))
    return directory


def run(path: Union[str, Path], stream: TextIO, sort_accounts: bool = False) -> LedgerDirectory:
    """
    Full pipeline: read, apply, render.

    Raises:
        InputError: On any input fault.
        OutputError: If writing to stream fails.
    """
    directory = load_directory(path)
    written = directory.write_all(stream, sort_accounts=sort_accounts)
    logger.info("Wrote %d account rows", written)
    return directory


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Console script entry point.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:]).
        stdout: Output stream (default: sys.stdout).

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    stream = stdout if stdout is not None else sys.stdout

    if not args.path:
        print("error: no input path given", file=sys.stderr)
        return EXIT_FAILURE

    try:
        run(args.path, stream, sort_accounts=args.sort_accounts)
    except InputError as e:
        print(f"error reading input csv file: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except OutputError as e:
        print(f"error writing output: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK
