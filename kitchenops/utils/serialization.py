from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from .timezone_utils import TimezoneUtils

_CENT = Decimal("0.01")

Number = Union[Decimal, float, int]


def as_float(value: Optional[Number]) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def as_money(value: Optional[Number]) -> Optional[str]:
    """Money leaves the API as a fixed two-decimal string."""
    if value is None:
        return None
    return str(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def quantize_money(value: Number) -> Decimal:
    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


def round_half_up(value: Number, places: int = 0) -> Union[int, Decimal]:
    """Halves round up; places=0 gives an int."""
    exponent = Decimal(1).scaleb(-places)
    result = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(result) if places == 0 else result


def iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return TimezoneUtils.ensure_utc(value).isoformat()
    return value.isoformat()
