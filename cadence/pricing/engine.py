from __future__ import annotations

import logging
from typing import Any

from . import calculators
from .measurements import QuoteMeasurements
from .results import BasePricing
from .rules import PricingRules
from .schemes import normalize_model

logger = logging.getLogger(__name__)


def calculate_pricing(model: Any, rules: Any, measurements: Any) -> BasePricing:
    """
    Base pricing (labor + materials) for one quote.

    - model: canonical tag, legacy alias or PricingModel
    - rules: a scheme's pricingRules bag (dict) or PricingRules
    - measurements: quote measurement data (dict) or QuoteMeasurements

    Raises UnsupportedModelError for an unknown model. Everything else falls back
    to documented defaults; no data-quality issue raises.
    """
    pricing_model = normalize_model(model)
    typed_rules = PricingRules.from_bag(rules)
    typed_measurements = QuoteMeasurements.from_data(measurements)

    calculator = calculators.get_calculator(pricing_model)
    result = calculator(typed_rules, typed_measurements)

    logger.debug(
        "base pricing %s: labor=%s material=%s total=%s lines=%d",
        pricing_model.value,
        result.labor_cost,
        result.material_cost,
        result.total,
        len(result.breakdown),
    )
    return result
