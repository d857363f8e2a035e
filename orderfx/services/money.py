"""Money / rounding helpers.

Centralized so the conversion path and any future endpoints use identical
rounding semantics.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENTS = Decimal("0.01")


def to_decimal(value: Union[float, int, str, Decimal]) -> Decimal:
    # str() gives the shortest repr, so 0.9234 stays 0.9234 instead of its binary expansion
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Decimal) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
