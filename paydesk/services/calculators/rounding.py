"""
PayDesk HR - Money Rounding

Every monetary step in payroll is rounded to cents, half up.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    """Coerce ints, floats, strings and None into Decimal (None -> 0)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() keeps float inputs like 0.1 from turning into binary noise
    return Decimal(str(value))


def round_money(value: Any, places: Optional[Decimal] = None) -> Decimal:
    """Round to 2 decimal places using ROUND_HALF_UP."""
    return to_decimal(value).quantize(places or CENTS, rounding=ROUND_HALF_UP)
