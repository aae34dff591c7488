from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, Tuple

from ..measurements import QuoteMeasurements
from ..results import BasePricing
from ..rules import LABOR_SHARE, MATERIAL_SHARE, PricingRules
from ..schemes import PricingModel

D = Decimal

Calculator = Callable[[PricingRules, QuoteMeasurements], BasePricing]

# Registry: pricing model -> calculator
calculator_registry: Dict[PricingModel, Calculator] = {}


def register(model: PricingModel) -> Callable[[Calculator], Calculator]:
    """
    Decorator to register the calculator for one pricing model.
    Fails fast on duplicate registrations (useful during dev/reload).
    """

    def deco(fn: Calculator) -> Calculator:
        existing = calculator_registry.get(model)
        if existing is not None and existing is not fn:
            raise ValueError(
                f"Duplicate calculator registration for '{model.value}': "
                f"{existing.__name__} vs {fn.__name__}"
            )
        calculator_registry[model] = fn
        return fn

    return deco


def get_calculator(model: PricingModel) -> Calculator:
    try:
        return calculator_registry[model]
    except KeyError:
        raise KeyError(
            f"No calculator for '{model.value}'. Registered: "
            f"{sorted(m.value for m in calculator_registry)}"
        )


def split_all_in(total: D, include_materials: bool) -> Tuple[D, D]:
    """All-in prices are 60% labor / 40% material, or all labor when materials are excluded."""
    if include_materials:
        return total * LABOR_SHARE, total * MATERIAL_SHARE
    return total, D("0")
