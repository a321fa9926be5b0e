"""
errors.py - Exception hierarchy for the client ledger.

Only malformed input and failed output are errors. A well-formed instruction
that is causally invalid (a dispute of an unknown transaction, a withdrawal
from an empty or locked account) is not an error and never raises.
"""

from typing import Any, Dict, Optional


class LedgerError(Exception):
    """Base exception for all client ledger errors."""
    pass


class InputError(LedgerError):
    """
    Raised when the transaction input cannot be read or understood.

    Attributes:
        line: 1-based line number in the input file, if known.
        details: Structured context for diagnostics.
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.details = details or {}

    def at_line(self, line: int) -> 'InputError':
        """Return a copy of this error tagged with an input line number."""
        return type(self)(self.message, line=line, details=self.details)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class ParseError(InputError):
    """Raised when a field or row fails to parse into a transaction record."""
    pass


class OutputError(LedgerError):
    """Raised when writing the snapshot table fails."""
    pass
