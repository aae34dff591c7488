from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from cadence.pricing.money import to_decimal
from cadence.pricing.schemes import PricingModel

# Fields a quote needs before it can be priced under each model
SCHEME_REQUIREMENTS: Dict[PricingModel, Tuple[str, ...]] = {
    PricingModel.TURNKEY: ("homeSqft", "jobScope", "propertyCondition"),
    PricingModel.RATE_BASED_SQFT: ("areas",),
    PricingModel.PRODUCTION_BASED: ("areas", "paintersOnSite"),
    PricingModel.FLAT_RATE_UNIT: ("flatRateItems",),
}

# Fields that only count as set when they hold a positive number
POSITIVE_NUMBER_FIELDS = ("homeSqft",)

# Pricing output a scheme change invalidates, with the value it resets to
PRICING_OUTPUT_RESET: Dict[str, Any] = {
    "subtotal": 0,
    "laborTotal": 0,
    "materialTotal": 0,
    "total": 0,
    "breakdown": None,
}


def has_field(data: Mapping[str, Any], field: str) -> bool:
    value = data.get(field)
    if field == "areas":
        return isinstance(value, list) and len(value) > 0
    if field == "flatRateItems":
        return isinstance(value, dict) and len(value) > 0
    if field in POSITIVE_NUMBER_FIELDS:
        number = to_decimal(value)
        return number is not None and number > 0
    if isinstance(value, (list, dict)):
        return len(value) > 0
    return value not in (None, "", 0, False)


def missing_fields(data: Mapping[str, Any], model: PricingModel) -> List[str]:
    return [f for f in SCHEME_REQUIREMENTS[model] if not has_field(data, f)]


def lost_fields(from_model: PricingModel, to_model: PricingModel) -> List[str]:
    target = SCHEME_REQUIREMENTS[to_model]
    return [f for f in SCHEME_REQUIREMENTS[from_model] if f not in target]
