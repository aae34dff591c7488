from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_CEILING, ROUND_HALF_UP
from typing import Any, Optional

logger = logging.getLogger(__name__)

D = Decimal

MONEY = D("0.01")
ZERO = D("0")


def qmoney(x: D) -> D:
    return x.quantize(MONEY, rounding=ROUND_HALF_UP)


def ceil_int(x: D) -> int:
    return int(x.to_integral_value(rounding=ROUND_CEILING))


def to_decimal(v: Any) -> Optional[D]:
    """
    Lenient number parsing for stored quote/rule data.
    Returns None for None, booleans, blanks and anything that isn't a finite number.
    """
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, Decimal):
        return v if v.is_finite() else None
    try:
        d = D(str(v).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    return d if d.is_finite() else None


def positive_or(v: Any, default: Optional[D]) -> Optional[D]:
    """Value if it parses to a number > 0, else `default`."""
    d = to_decimal(v)
    if d is None or d <= 0:
        return default
    return d


def quantity(v: Any) -> D:
    """Quantities never go below zero; unreadable input counts as nothing."""
    d = to_decimal(v)
    if d is None:
        if v not in (None, ""):
            logger.warning("unparseable quantity %r treated as 0", v)
        return ZERO
    return d if d > 0 else ZERO


_FALSE_STRINGS = {"false", "0", "no", "off"}


def to_flag(v: Any, default: bool = True) -> bool:
    """Stored booleans sometimes arrive as strings; "false"/"0"/"no"/"off" read as False."""
    if v is None:
        return default
    if isinstance(v, str):
        return v.strip().lower() not in _FALSE_STRINGS
    return bool(v)
