from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from ..categories import UnitCategory, resolve_unit_category
from ..measurements import MeasurementUnit, QuoteMeasurements
from ..results import BasePricing, BreakdownLine
from ..rules import PricingRules
from ..schemes import PricingModel
from .base import D, register, split_all_in

# flatRateItems keys -> category names the unit resolver understands
FLAT_RATE_ITEM_LABELS: Dict[str, str] = {
    "doors": "Doors",
    "windows": "Windows",
    "smallRooms": "Small Room",
    "mediumRooms": "Medium Room",
    "largeRooms": "Large Room",
    "closets": "Closets",
    "accentWalls": "Accent Walls",
    "cabinets": "Cabinets",
    "garageDoors": "Garage Doors",
    "shutters": "Shutters",
}


def unit_price(rules: PricingRules, category: Optional[UnitCategory]) -> D:
    if category is None:
        return D("0")
    return getattr(rules.unit_prices, category.value)


def _flat_rate_lines(m: QuoteMeasurements) -> Iterator[Tuple[str, str, D]]:
    for side, items in m.flat_rate_items.items():
        for key, count in items.items():
            if count > 0:
                yield side.capitalize(), FLAT_RATE_ITEM_LABELS.get(key, key), D(count)


@register(PricingModel.FLAT_RATE_UNIT)
def calculate_flat_rate(rules: PricingRules, m: QuoteMeasurements) -> BasePricing:
    """Fixed price per countable unit; same all-in split as turnkey."""
    total = D("0")
    breakdown: List[BreakdownLine] = []

    def add(area_name: str, category_name: str, quantity: D, unit: Optional[str]) -> None:
        nonlocal total
        category = resolve_unit_category(category_name)
        price = unit_price(rules, category)
        cost = quantity * price
        total += cost
        breakdown.append(
            BreakdownLine(
                area_name=area_name,
                category=category_name,
                category_tag=category.value if category else None,
                quantity=quantity,
                unit=unit,
                unit_price=price,
                cost=cost,
            )
        )

    for area, item in m.iter_selected():
        add(area.name, item.category_name, item.quantity, item.measurement_unit)

    for side, label, count in _flat_rate_lines(m):
        add(side, label, count, MeasurementUnit.UNIT)

    labor, material = split_all_in(total, rules.include_materials)

    return BasePricing(
        model=PricingModel.FLAT_RATE_UNIT,
        labor_cost=labor,
        material_cost=material,
        subtotal=total,
        total=total,
        include_materials=rules.include_materials,
        breakdown=breakdown,
    )
