"""
Denomination helpers.

One display unit (ONE) is 10**18 base units, composed as NANO * NANO. All
conversions go through `decimal.Decimal` and land in exact Python ints; floats
are never used for amounts.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

NANO = 10**9
ONE = NANO * NANO

Amount = Union[str, int, Decimal]


def _to_decimal(value: Amount) -> Decimal:
    if isinstance(value, float):
        raise TypeError("amounts must be str, int or Decimal, not float")
    try:
        d = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"invalid amount: {value!r}") from e
    if not d.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    return d


def _scale(value: Amount, factor: int) -> int:
    d = _to_decimal(value)
    with localcontext() as ctx:
        # wide enough that no realistic amount is rounded before truncation
        ctx.prec = 100
        scaled = d * factor
    # truncate toward zero, same as BigDecimal.toBigInteger
    return int(scaled)


def to_base_units(amount: Amount) -> int:
    """Display-unit amount ("1.5") -> base units (1500000000000000000)."""
    return _scale(amount, ONE)


def to_nano_units(price: Amount) -> int:
    """Gas price quoted in nano -> base units."""
    return _scale(price, NANO)


def from_base_units(value: int) -> str:
    """Base units -> display string. For messages only; never compare on it."""
    d = Decimal(int(value)) / Decimal(ONE)
    return format(d.normalize(), "f")


__all__ = ["NANO", "ONE", "Amount", "to_base_units", "to_nano_units", "from_base_units"]
