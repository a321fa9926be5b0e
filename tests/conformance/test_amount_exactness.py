"""
Amount Exactness Conformance Tests

INVARIANT: Amount arithmetic is exact and formatting is canonical.

    ∀ a, b:   (a + b) - b = a
    ∀ s with ≤ 4 fractional digits:   format(parse(s)) = canonical(s)

This guarantees:
- Balances never drift, however many transactions are replayed
- Identical balances always print identically
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from decimal import Decimal

from clientledger import Amount, AMOUNT_ONE


scaled_values = st.integers(min_value=-10 ** 15, max_value=10 ** 15)
amounts = scaled_values.map(Amount.from_scaled)


@st.composite
def decimal_strings(draw):
    """Strings like "12", "-0.5", "7.0100" with at most four fractional digits."""
    sign = draw(st.sampled_from(["", "-"]))
    whole = draw(st.integers(min_value=0, max_value=10 ** 9))
    fraction = draw(st.text(alphabet="0123456789", min_size=0, max_size=4))
    if fraction:
        return f"{sign}{whole}.{fraction}"
    return f"{sign}{whole}"


def canonical(text: str) -> str:
    """Trailing-zero-stripped form, via Decimal normalization."""
    d = Decimal(text)
    if d == d.to_integral_value():
        return str(int(d))
    return format(d.normalize(), 'f')


class TestAmountProperties:
    """Property-based tests for Amount."""

    @given(decimal_strings())
    @settings(max_examples=300)
    def test_parse_format_round_trip(self, text):
        """
        PROPERTY: Formatting a parsed string yields its canonical form.
        """
        assert Amount.parse(text).format() == canonical(text)

    @given(amounts, amounts)
    @settings(max_examples=200)
    def test_add_then_subtract_is_identity(self, a, b):
        """
        PROPERTY: (a + b) - b == a
        """
        assert (a + b) - b == a

    @given(amounts, amounts)
    @settings(max_examples=200)
    def test_matches_decimal_arithmetic(self, a, b):
        """
        PROPERTY: Results agree with Decimal arithmetic.
        """
        assert (a + b).to_decimal() == a.to_decimal() + b.to_decimal()
        assert (a - b).to_decimal() == a.to_decimal() - b.to_decimal()

    @given(amounts, amounts)
    def test_ordering_matches_scaled_value(self, a, b):
        """
        PROPERTY: Ordering is the ordering of the scaled integers.
        """
        assert (a < b) == (a.value < b.value)
        assert (a == b) == (a.value == b.value)

    @given(amounts)
    def test_format_parses_back(self, a):
        """
        PROPERTY: The canonical form parses to the same value.
        """
        assert Amount.parse(a.format()) == a

    @given(amounts)
    def test_decomposition_invariant(self, a):
        """
        PROPERTY: 0 <= fract < 10^4 and |value| = |trunc| * 10^4 + fract.
        """
        assert 0 <= a.fract() < AMOUNT_ONE
        assert abs(a.value) == abs(a.trunc()) * AMOUNT_ONE + a.fract()


class TestAmountExamples:
    """Explicit exactness examples."""

    def test_many_small_additions(self):
        """Ten thousand additions of 0.0001 give exactly 1."""
        total = Amount.zero()
        step = Amount.parse("0.0001")
        for _ in range(10_000):
            total += step
        assert total == Amount.parse("1")
        assert str(total) == "1"

    @pytest.mark.parametrize("text, expected", [
        ("1.0100", "1.01"),
        ("1.0001", "1.0001"),
        ("-0.50", "-0.5"),
        ("-0", "0"),
        ("0.0", "0"),
    ])
    def test_canonical_examples(self, text, expected):
        assert Amount.parse(text).format() == expected
