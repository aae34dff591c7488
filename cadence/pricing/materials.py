from __future__ import annotations

from decimal import Decimal
from typing import Any

from .money import ZERO, ceil_int, to_decimal
from .results import MaterialCost
from .rules import (
    DEFAULT_APPLICATION_METHOD,
    DEFAULT_COATS,
    DEFAULT_COVERAGE,
    SPRAY_COVERAGE,
    PricingRules,
)

D = Decimal


def adjusted_coverage(coverage: D, application_method: str) -> D:
    """
    Spray loses paint to overspray: the untouched default coverage (350) drops
    to 300. A coverage the contractor set explicitly is always respected.
    """
    if application_method == "spray" and coverage == DEFAULT_COVERAGE:
        return SPRAY_COVERAGE
    return coverage


def calculate_gallons(
    total_sqft: Any,
    coats: Any = DEFAULT_COATS,
    coverage: Any = DEFAULT_COVERAGE,
    application_method: str = DEFAULT_APPLICATION_METHOD,
) -> int:
    """gallons = ceil(sqft * coats / coverage), coverage adjusted for spray."""
    sqft = to_decimal(total_sqft) or ZERO
    n_coats = to_decimal(coats) or ZERO
    cov = adjusted_coverage(to_decimal(coverage) or ZERO, application_method)

    if sqft <= 0 or n_coats <= 0 or cov <= 0:
        return 0
    return ceil_int(sqft * n_coats / cov)


def calculate_material_cost(total_sqft: Any, rules: PricingRules) -> MaterialCost:
    if not rules.include_materials:
        return MaterialCost()

    gallons = calculate_gallons(
        total_sqft, rules.coats, rules.coverage, rules.application_method
    )
    return MaterialCost(
        material_cost=D(gallons) * rules.cost_per_gallon,
        gallons=gallons,
        cost_per_gallon=rules.cost_per_gallon,
        coats=rules.coats,
        coverage=rules.coverage,
        application_method=rules.application_method,
    )
