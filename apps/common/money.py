"""Decimal helpers for monetary amounts."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal('0.01')
ZERO = Decimal('0.00')

# Balances closer to zero than this count as settled.
BALANCE_EPSILON = Decimal('0.01')


def quantize_money(value) -> Decimal:
    """Round to whole cents using half-up rounding."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """
    Coerce ints, strings and Decimals to Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal('0.1'), not its
    binary expansion.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a monetary value: {value!r}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a monetary value: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a monetary value: {value!r}")
    return result


def is_settled(balance: Decimal) -> bool:
    return abs(balance) < BALANCE_EPSILON
