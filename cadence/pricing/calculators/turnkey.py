from __future__ import annotations

from ..measurements import QuoteMeasurements
from ..results import BasePricing
from ..rules import PricingRules
from ..schemes import PricingModel
from .base import D, register, split_all_in


def turnkey_rate(rules: PricingRules, job_scope: str) -> D:
    if job_scope == "interior" and rules.interior_rate is not None:
        return rules.interior_rate
    if job_scope == "exterior" and rules.exterior_rate is not None:
        return rules.exterior_rate
    return rules.turnkey_rate


@register(PricingModel.TURNKEY)
def calculate_turnkey(rules: PricingRules, m: QuoteMeasurements) -> BasePricing:
    """Whole-home: total = home sqft x rate, no per-surface breakdown."""
    rate = turnkey_rate(rules, m.job_scope)
    total = m.home_sqft * rate
    labor, material = split_all_in(total, rules.include_materials)

    return BasePricing(
        model=PricingModel.TURNKEY,
        labor_cost=labor,
        material_cost=material,
        subtotal=total,
        total=total,
        include_materials=rules.include_materials,
        home_sqft=m.home_sqft,
        rate=rate,
        job_scope=m.job_scope,
    )
