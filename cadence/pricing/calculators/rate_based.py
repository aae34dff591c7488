from __future__ import annotations

import logging
from typing import List

from ..categories import resolve_labor_category
from ..materials import calculate_material_cost
from ..measurements import QuoteMeasurements
from ..results import BasePricing, BreakdownLine
from ..rules import PricingRules
from ..schemes import PricingModel
from .base import D, register

logger = logging.getLogger(__name__)


@register(PricingModel.RATE_BASED_SQFT)
def calculate_rate_based(rules: PricingRules, m: QuoteMeasurements) -> BasePricing:
    """
    Labor = sum(quantity x category rate) over selected items.
    Materials come from the summed sqft of every sqft-unit item.
    """
    labor_total = D("0")
    total_sqft = D("0")
    breakdown: List[BreakdownLine] = []

    for area, item in m.iter_selected():
        category = resolve_labor_category(item.category_name)
        if category is None:
            logger.warning(
                "no labor rate for category %r in area %r", item.category_name, area.name
            )
            rate = D("0")
        else:
            rate = getattr(rules.labor_rates, category.value)

        labor_cost = item.quantity * rate
        labor_total += labor_cost

        if item.is_sqft:
            total_sqft += item.quantity

        breakdown.append(
            BreakdownLine(
                area_name=area.name,
                category=item.category_name,
                category_tag=category.value if category else None,
                quantity=item.quantity,
                unit=item.measurement_unit,
                labor_rate=rate,
                labor_cost=labor_cost,
            )
        )

    materials = calculate_material_cost(total_sqft, rules)
    subtotal = labor_total + materials.material_cost

    return BasePricing(
        model=PricingModel.RATE_BASED_SQFT,
        labor_cost=labor_total,
        material_cost=materials.material_cost,
        gallons=materials.gallons,
        subtotal=subtotal,
        total=subtotal,
        include_materials=rules.include_materials,
        total_sqft=total_sqft,
        breakdown=breakdown,
    )
