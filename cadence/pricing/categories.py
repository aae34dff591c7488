from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


class SurfaceCategory(str, Enum):
    WALLS = "walls"
    CEILINGS = "ceilings"
    TRIM = "trim"
    DOORS = "doors"
    CABINETS = "cabinets"


class UnitCategory(str, Enum):
    DOOR = "door"
    WINDOW = "window"
    ROOM_SMALL = "room_small"
    ROOM_MEDIUM = "room_medium"
    ROOM_LARGE = "room_large"


# Ordered, first match wins: "Trim Door" is trim, "Wall Cabinet" is walls.
LABOR_CATEGORIES: Tuple[Tuple[str, SurfaceCategory], ...] = (
    ("wall", SurfaceCategory.WALLS),
    ("ceiling", SurfaceCategory.CEILINGS),
    ("trim", SurfaceCategory.TRIM),
    ("door", SurfaceCategory.DOORS),
    ("cabinet", SurfaceCategory.CABINETS),
)

PRODUCTION_CATEGORIES: Tuple[Tuple[str, SurfaceCategory], ...] = LABOR_CATEGORIES[:3]

UNIT_CATEGORIES: Tuple[Tuple[str, UnitCategory], ...] = (
    ("door", UnitCategory.DOOR),
    ("window", UnitCategory.WINDOW),
)

ROOM_SIZES: Tuple[Tuple[str, UnitCategory], ...] = (
    ("small", UnitCategory.ROOM_SMALL),
    ("large", UnitCategory.ROOM_LARGE),
)


def first_match(category_name: str, table: Sequence[Tuple[str, T]]) -> Optional[T]:
    name = (category_name or "").lower()
    for needle, tag in table:
        if needle in name:
            return tag
    return None


def resolve_labor_category(category_name: str) -> Optional[SurfaceCategory]:
    return first_match(category_name, LABOR_CATEGORIES)


def resolve_production_category(category_name: str) -> Optional[SurfaceCategory]:
    return first_match(category_name, PRODUCTION_CATEGORIES)


def resolve_unit_category(category_name: str) -> Optional[UnitCategory]:
    tag = first_match(category_name, UNIT_CATEGORIES)
    if tag is not None:
        return tag
    if "room" in (category_name or "").lower():
        return first_match(category_name, ROOM_SIZES) or UnitCategory.ROOM_MEDIUM
    return None
