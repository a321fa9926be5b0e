"""
amount.py - Exact Fixed-Point Monetary Amount

Amount stores a signed value scaled by 10^4 in a plain Python int, so
addition, subtraction and comparison are exact integer operations with no
floating-point drift and no overflow.

    Amount.parse("1.5").value          -> 15000
    Amount.parse("-0.0001").value      -> -1
    str(Amount.from_scaled(10100))     -> "1.01"

Formatting is canonical: trailing fractional zeros are stripped and a whole
value renders without a decimal point, so identical balances always produce
identical output.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import Tuple

from .errors import ParseError


# ============================================================================
# CONSTANTS
# ============================================================================

# Number of fractional digits carried by every Amount.
DECIMAL_PLACES = 4

# Scaled value of one whole unit.
AMOUNT_ONE = 10 ** DECIMAL_PLACES

_QUANTIZER = Decimal(1).scaleb(-DECIMAL_PLACES)


# ============================================================================
# HELPERS
# ============================================================================

def count_remove_trailing_zeroes(value: int) -> Tuple[int, int]:
    """
    Strip trailing decimal zeros from a non-negative integer.

    Returns:
        (number of zeros removed, remaining value). Zero is returned
        unchanged as (0, 0).
    """
    count = 0
    if value > 0:
        while value % 10 == 0:
            value //= 10
            count += 1
    return count, value


def _parse_whole(text: str, raw: str) -> int:
    # int() also accepts "1_000" and surrounding whitespace; require plain digits
    digits = text[1:] if text[:1] in "+-" else text
    if not digits.isdigit() or not digits.isascii():
        raise ParseError(f"invalid integer part in amount: {raw!r}")
    return int(digits)


def _parse_fraction(text: str, raw: str) -> int:
    if not text.isdigit() or not text.isascii():
        raise ParseError(f"invalid fractional part in amount: {raw!r}")
    # Digits past DECIMAL_PLACES are truncated
    return int(text[:DECIMAL_PLACES].ljust(DECIMAL_PLACES, "0"))


# ============================================================================
# AMOUNT
# ============================================================================

@dataclass(frozen=True, slots=True, order=True)
class Amount:
    """
    Signed fixed-point amount with four fractional digits.

    Attributes:
        value: The amount multiplied by 10^4 (e.g. 1.5 is stored as 15000).

    Equality, hashing and ordering are defined on the scaled value. The
    class is immutable; every arithmetic operation returns a new Amount.
    """
    value: int = 0

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Amount value must be int, got {type(self.value)}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def zero(cls) -> Amount:
        return cls(0)

    @classmethod
    def from_scaled(cls, value: int) -> Amount:
        """Wrap a raw scaled integer (value = amount * 10^4)."""
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> Amount:
        """
        Parse a decimal string such as "12", "-3.5" or "0.0001".

        The sign applies to the whole value. Fractional digits beyond the
        fourth are truncated.

        Raises:
            ParseError: If the string is empty, has more than one '.', or
                        either part is not made of decimal digits.
        """
        if not isinstance(text, str):
            raise ParseError(f"amount must be a string, got {type(text).__name__}")
        raw = text
        text = text.strip()
        if not text:
            raise ParseError("empty amount")

        whole_str, _, fract_str = text.partition(".")
        negative = whole_str.startswith("-")
        whole = _parse_whole(whole_str, raw)
        # "1." is one unit; the integer part was already checked above
        fract = _parse_fraction(fract_str, raw) if fract_str else 0

        scaled = whole * AMOUNT_ONE + fract
        return cls(-scaled if negative else scaled)

    @classmethod
    def from_decimal(cls, value: Decimal) -> Amount:
        """Convert a Decimal, truncating digits past the fourth decimal place."""
        if not value.is_finite():
            raise ValueError(f"Amount must be finite, got {value}")
        scaled = value.quantize(_QUANTIZER, rounding=ROUND_DOWN).scaleb(DECIMAL_PLACES)
        return cls(int(scaled))

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def trunc(self) -> int:
        """Whole units, truncated toward zero."""
        whole, _ = divmod(abs(self.value), AMOUNT_ONE)
        return -whole if self.value < 0 else whole

    def fract(self) -> int:
        """Fractional remainder of the absolute value, in [0, 10^4)."""
        return abs(self.value) % AMOUNT_ONE

    def is_zero(self) -> bool:
        return self.value == 0

    def to_decimal(self) -> Decimal:
        return Decimal(self.value).scaleb(-DECIMAL_PLACES)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.value + other.value)

    def __sub__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.value - other.value)

    def __neg__(self) -> Amount:
        return Amount(-self.value)

    def __abs__(self) -> Amount:
        return Amount(abs(self.value))

    def __bool__(self) -> bool:
        return self.value != 0

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(self) -> str:
        """
        Canonical display form.

        Examples:
            10000  -> "1"
            10100  -> "1.01"
            10001  -> "1.0001"
            -5000  -> "-0.5"
        """
        sign = "-" if self.value < 0 else ""
        whole, fract = divmod(abs(self.value), AMOUNT_ONE)
        if fract == 0:
            return f"{sign}{whole}"
        count, fract = count_remove_trailing_zeroes(fract)
        width = DECIMAL_PLACES - count
        return f"{sign}{whole}.{fract:0>{width}}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Amount({self.format()})"
