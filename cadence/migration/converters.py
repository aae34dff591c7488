from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Optional, Tuple

from cadence.pricing.measurements import Area, MeasurementUnit, clean_flat_rate_items
from cadence.pricing.money import ceil_int

D = Decimal

# Assumed wall area behind one flat-rate item, used in both directions
AREA_ESTIMATES_SQFT: Dict[str, int] = {
    "smallRooms": 300,
    "mediumRooms": 450,
    "largeRooms": 600,
    "closets": 100,
    "accentWalls": 120,
}

INTERIOR_ITEM_CATEGORIES: Dict[str, str] = {
    "doors": "Interior Doors",
    "smallRooms": "Small Room Walls",
    "mediumRooms": "Medium Room Walls",
    "largeRooms": "Large Room Walls",
    "closets": "Closet Walls",
    "accentWalls": "Accent Walls",
    "cabinets": "Kitchen Cabinets",
}

EXTERIOR_ITEM_CATEGORIES: Dict[str, str] = {
    "doors": "Exterior Doors",
    "windows": "Windows",
    "garageDoors": "Garage Doors",
    "shutters": "Shutters",
}

CONVERTED_AREAS: Tuple[Tuple[str, str, str, Dict[str, str]], ...] = (
    ("interior", "interior-converted", "Interior (Converted)", INTERIOR_ITEM_CATEGORIES),
    ("exterior", "exterior-converted", "Exterior (Converted)", EXTERIOR_ITEM_CATEGORIES),
)


def _areas(raw_areas: Any) -> List[Area]:
    if not isinstance(raw_areas, list):
        return []
    return [Area.model_validate(a) for a in raw_areas if isinstance(a, dict)]


def calculate_total_sqft_from_areas(raw_areas: Any) -> int:
    """Sum of every sqft-unit item (selected or not), rounded to whole sqft."""
    total = D("0")
    for area in _areas(raw_areas):
        for item in area.items:
            if item.is_sqft:
                total += item.quantity
    return int(total.quantize(D("1"), rounding=ROUND_HALF_UP))


def convert_flat_rate_items_to_areas(flat_rate_items: Any) -> List[Dict[str, Any]]:
    """
    One synthetic area per side that has convertible items. Room-like items become
    sqft wall items using the fixed per-item estimates; doors, windows, cabinets
    and the like stay counts. Unknown item keys are skipped.
    """
    items_by_side = clean_flat_rate_items(flat_rate_items)
    areas: List[Dict[str, Any]] = []

    for side, area_id, area_name, categories in CONVERTED_AREAS:
        items: List[Dict[str, Any]] = []
        for key, count in items_by_side.get(side, {}).items():
            category_name = categories.get(key)
            if category_name is None or count <= 0:
                continue

            estimate = AREA_ESTIMATES_SQFT.get(key)
            if estimate is not None:
                items.append(
                    {
                        "categoryName": category_name,
                        "quantity": count * estimate,
                        "measurementUnit": MeasurementUnit.SQFT,
                        "selected": True,
                    }
                )
            else:
                items.append(
                    {
                        "categoryName": category_name,
                        "quantity": count,
                        "measurementUnit": MeasurementUnit.UNIT,
                        "selected": True,
                    }
                )

        if items:
            areas.append({"id": area_id, "name": area_name, "items": items})

    return areas


Matcher = Callable[[str], bool]

# Ordered, first match wins: (matcher, side, item key, sqft per item or None)
AREA_TO_FLAT_RATE: Tuple[Tuple[Matcher, str, str, Optional[int]], ...] = (
    (lambda c: "door" in c and "exterior" not in c, "interior", "doors", None),
    (lambda c: "exterior door" in c, "exterior", "doors", None),
    (lambda c: "window" in c, "exterior", "windows", None),
    (lambda c: "garage" in c, "exterior", "garageDoors", None),
    (lambda c: "shutter" in c, "exterior", "shutters", None),
    (lambda c: "cabinet" in c, "interior", "cabinets", None),
    (lambda c: "closet" in c, "interior", "closets", AREA_ESTIMATES_SQFT["closets"]),
    (lambda c: "accent" in c, "interior", "accentWalls", AREA_ESTIMATES_SQFT["accentWalls"]),
)


def convert_areas_to_flat_rate_items(raw_areas: Any) -> Dict[str, Dict[str, int]]:
    """
    Best-effort inverse of convert_flat_rate_items_to_areas.

    Lossy on purpose: room walls and any other unrecognized category are dropped,
    any non-exterior door (garage doors included) counts as an interior door,
    and closet/accent-wall sqft is divided back by its estimate and rounded up,
    so a round trip does not have to reproduce the original counts.
    """
    flat: Dict[str, Dict[str, int]] = {"interior": {}, "exterior": {}}

    for area in _areas(raw_areas):
        for item in area.items:
            qty = int(item.quantity)  # whole units only
            if qty <= 0:
                continue

            category = item.category_name.lower()
            for matches, side, key, per_item_sqft in AREA_TO_FLAT_RATE:
                if not matches(category):
                    continue
                count = qty if per_item_sqft is None else ceil_int(D(qty) / D(per_item_sqft))
                flat[side][key] = flat[side].get(key, 0) + count
                break

    return flat
