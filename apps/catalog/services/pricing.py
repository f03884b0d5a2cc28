"""Unit prices charged to friends."""

from decimal import Decimal
from typing import Optional

from apps.common.money import ZERO, quantize_money


def price_for(product, variant: str, cycle) -> Optional[Decimal]:
    """
    Base variant price times the cycle markup, rounded half-up to cents.

    Returns None when the product has no such variant or its base price
    is not positive; the variant is then unavailable.
    """
    base = product.price_table().get(variant)
    if base is None or base <= ZERO:
        return None
    return quantize_money(base * cycle.markup_ratio)
