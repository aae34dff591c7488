from __future__ import annotations

from typing import List, Optional

from cadence.core.settings import settings

from ..categories import resolve_production_category
from ..materials import calculate_material_cost
from ..measurements import QuoteMeasurements
from ..money import ceil_int
from ..results import BasePricing, BreakdownLine
from ..rules import PricingRules
from ..schemes import PricingModel
from .base import D, register

HOURS = D("0.01")


def estimate_crew_hours(total_hours: D, crew_size: Optional[int]) -> int:
    """Wall-clock hours for a crew working in parallel, rounded up."""
    size = crew_size or settings.DEFAULT_CREW_SIZE
    if total_hours <= 0 or size <= 0:
        return 0
    return ceil_int(total_hours / D(size))


@register(PricingModel.PRODUCTION_BASED)
def calculate_production_based(rules: PricingRules, m: QuoteMeasurements) -> BasePricing:
    """
    Labor = sum(quantity / production rate) x hourly rate.
    Items without a production rate add no hours and no breakdown line,
    but sqft items still count toward materials.
    """
    hourly = rules.hourly_labor_rate
    labor_total = D("0")
    total_hours = D("0")
    total_sqft = D("0")
    breakdown: List[BreakdownLine] = []

    for area, item in m.iter_selected():
        category = resolve_production_category(item.category_name)
        if category is not None:
            production_rate = getattr(rules.production_rates, category.value)
            hours = item.quantity / production_rate
            labor_cost = hours * hourly

            total_hours += hours
            labor_total += labor_cost

            breakdown.append(
                BreakdownLine(
                    area_name=area.name,
                    category=item.category_name,
                    category_tag=category.value,
                    quantity=item.quantity,
                    unit=item.measurement_unit,
                    production_rate=production_rate,
                    hours=hours.quantize(HOURS),
                    hourly_rate=hourly,
                    labor_cost=labor_cost,
                )
            )

        if item.is_sqft:
            total_sqft += item.quantity

    materials = calculate_material_cost(total_sqft, rules)
    subtotal = labor_total + materials.material_cost
    crew_size = rules.crew_size or settings.DEFAULT_CREW_SIZE

    return BasePricing(
        model=PricingModel.PRODUCTION_BASED,
        labor_cost=labor_total,
        material_cost=materials.material_cost,
        gallons=materials.gallons,
        subtotal=subtotal,
        total=subtotal,
        include_materials=rules.include_materials,
        total_sqft=total_sqft,
        total_hours=total_hours.quantize(HOURS),
        hourly_labor_rate=hourly,
        crew_size=crew_size,
        crew_hours=estimate_crew_hours(total_hours, crew_size),
        breakdown=breakdown,
    )
