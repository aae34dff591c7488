# cadence/pricing/__init__.py
from __future__ import annotations

from .dimensions import calculate_surface_area, get_dimension_fields, validate_dimensions
from .engine import calculate_pricing
from .markup import MarkupSettings, apply_markups_and_tax
from .materials import calculate_gallons, calculate_material_cost
from .measurements import Area, LineItem, QuoteMeasurements
from .quote import price_quote
from .results import BasePricing, BreakdownLine, FinalPricing, QuotePricing
from .rules import PricingRules
from .schemes import MeasurementShape, PricingModel, PricingScheme, normalize_model

__all__ = [
    "calculate_pricing",
    "apply_markups_and_tax",
    "calculate_gallons",
    "calculate_surface_area",
    "get_dimension_fields",
    "validate_dimensions",
    "calculate_material_cost",
    "price_quote",
    "normalize_model",
    "MarkupSettings",
    "PricingRules",
    "PricingModel",
    "PricingScheme",
    "MeasurementShape",
    "QuoteMeasurements",
    "Area",
    "LineItem",
    "BasePricing",
    "BreakdownLine",
    "FinalPricing",
    "QuotePricing",
]
