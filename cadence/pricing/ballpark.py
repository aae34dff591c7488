from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from .money import to_decimal

logger = logging.getLogger(__name__)

D = Decimal

# Base $/sqft by first ZIP digit
REGIONAL_RATES: Dict[str, D] = {
    "0": D("3.8"),  # Northeast
    "1": D("3.5"),  # Mid-Atlantic
    "2": D("3.0"),  # Southeast
    "3": D("2.8"),  # Deep South
    "4": D("2.7"),  # Midwest
    "5": D("2.6"),  # Plains
    "6": D("2.9"),  # Southwest
    "7": D("3.0"),  # South Central
    "8": D("3.5"),  # Mountain
    "9": D("4.2"),  # West Coast
}
DEFAULT_REGIONAL_RATE = D("3.0")

PROJECT_TYPE_MULTIPLIERS: Dict[str, D] = {
    "interior": D("1.0"),
    "exterior": D("1.3"),
    "trim": D("0.4"),
    "cabinets": D("0.7"),
    "whole_house": D("1.5"),
    "other": D("1.0"),
}

# Used when home size is unknown
ROOM_BASE_PRICES: Dict[int, D] = {
    1: D("800"),
    2: D("1400"),
    3: D("2000"),
    4: D("2600"),
    5: D("3200"),
    6: D("3800"),
    7: D("4400"),
    8: D("5000"),
}
EXTRA_ROOM_PRICE = D("600")
DEFAULT_BASE_PRICE = D("2000")

ROUND_TO = D("50")
MINIMUM_QUOTE = D("500")
DEFAULT_VARIANCE = D("0.15")


def _round_to_fifty(x: D) -> D:
    return (x / ROUND_TO).quantize(D("1"), rounding=ROUND_HALF_UP) * ROUND_TO


def regional_rate(zip_code: Optional[str]) -> D:
    code = str(zip_code or "").strip()
    if not code:
        return DEFAULT_REGIONAL_RATE
    return REGIONAL_RATES.get(code[0], DEFAULT_REGIONAL_RATE)


def calculation_method(home_size: Any = None, room_count: Any = None) -> str:
    size = to_decimal(home_size)
    rooms = to_decimal(room_count)
    if size is not None and size > 0:
        return "square_footage"
    if rooms is not None and rooms > 0:
        return "room_count"
    return "default"


def ballpark_quote(
    zip_code: Optional[str] = None,
    home_size: Any = None,
    room_count: Any = None,
    project_type: str = "interior",
) -> D:
    """
    Rough lead-form estimate before any measurements exist.

    Preferred basis is home size x regional rate; otherwise a room-count table
    (extrapolated past 8 rooms) or a flat default, both scaled by the region
    relative to the 3.00 baseline. The project-type multiplier applies last,
    the result is rounded to the nearest $50 and never goes below $500.
    """
    rate = regional_rate(zip_code)
    method = calculation_method(home_size, room_count)

    if method == "square_footage":
        base = to_decimal(home_size) * rate
    elif method == "room_count":
        rooms = int(to_decimal(room_count))
        if rooms <= 8:
            base = ROOM_BASE_PRICES[max(rooms, 1)]
        else:
            base = ROOM_BASE_PRICES[8] + (rooms - 8) * EXTRA_ROOM_PRICE
        base = base * (rate / DEFAULT_REGIONAL_RATE)
    else:
        base = DEFAULT_BASE_PRICE * (rate / DEFAULT_REGIONAL_RATE)

    multiplier = PROJECT_TYPE_MULTIPLIERS.get(project_type, D("1.0"))
    price = _round_to_fifty(base * multiplier)
    return max(price, MINIMUM_QUOTE)


@dataclass(frozen=True)
class QuoteRange:
    quote: D
    low: D
    high: D


def quote_range(quote: Any, variance: Any = DEFAULT_VARIANCE) -> QuoteRange:
    q = to_decimal(quote) or D("0")
    spread = _round_to_fifty(q * (to_decimal(variance) or D("0")))
    return QuoteRange(quote=q, low=q - spread, high=q + spread)


def quote_message(rng: QuoteRange) -> str:
    return (
        f"Based on your location and project details, your estimated cost is between "
        f"${rng.low:,.0f} and ${rng.high:,.0f}. This is a preliminary estimate - we'll "
        f"provide a detailed quote after our free on-site assessment."
    )


@dataclass(frozen=True)
class BallparkBreakdown:
    quote: D
    range: QuoteRange
    regional_rate: D
    project_type: str
    project_multiplier: D
    calculation_method: str
    message: str
    inputs: Dict[str, Any] = field(default_factory=dict)


def ballpark_breakdown(
    zip_code: Optional[str] = None,
    home_size: Any = None,
    room_count: Any = None,
    project_type: str = "interior",
) -> BallparkBreakdown:
    quote = ballpark_quote(zip_code, home_size, room_count, project_type)
    rng = quote_range(quote)
    return BallparkBreakdown(
        quote=quote,
        range=rng,
        regional_rate=regional_rate(zip_code),
        project_type=project_type,
        project_multiplier=PROJECT_TYPE_MULTIPLIERS.get(project_type, D("1.0")),
        calculation_method=calculation_method(home_size, room_count),
        message=quote_message(rng),
        inputs={"zipCode": zip_code, "homeSize": home_size, "roomCount": room_count},
    )


def can_provide_accurate_quote(
    zip_code: Optional[str] = None, home_size: Any = None, room_count: Any = None
) -> bool:
    return bool(zip_code) and calculation_method(home_size, room_count) != "default"
