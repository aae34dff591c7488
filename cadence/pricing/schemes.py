from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from cadence.core.errors import UnsupportedModelError

from .rules import PricingRules

logger = logging.getLogger(__name__)


class PricingModel(str, Enum):
    TURNKEY = "turnkey"
    RATE_BASED_SQFT = "rate_based_sqft"
    PRODUCTION_BASED = "production_based"
    FLAT_RATE_UNIT = "flat_rate_unit"


class MeasurementShape(str, Enum):
    WHOLE_HOME = "whole_home"
    AREAS = "areas"
    FLAT_RATE_ITEMS = "flat_rate_items"


# Historical scheme tags still stored on older quotes/schemes
LEGACY_ALIASES: Dict[str, PricingModel] = {
    "sqft_turnkey": PricingModel.TURNKEY,
    "sqft_labor_paint": PricingModel.RATE_BASED_SQFT,
    "rate_based": PricingModel.RATE_BASED_SQFT,
    "hourly_time_materials": PricingModel.PRODUCTION_BASED,
    "unit_pricing": PricingModel.FLAT_RATE_UNIT,
    "room_flat_rate": PricingModel.FLAT_RATE_UNIT,
}

_SHAPES: Dict[PricingModel, MeasurementShape] = {
    PricingModel.TURNKEY: MeasurementShape.WHOLE_HOME,
    PricingModel.RATE_BASED_SQFT: MeasurementShape.AREAS,
    PricingModel.PRODUCTION_BASED: MeasurementShape.AREAS,
    PricingModel.FLAT_RATE_UNIT: MeasurementShape.FLAT_RATE_ITEMS,
}


def normalize_model(tag: Any) -> PricingModel:
    """
    Map a canonical tag or legacy alias onto a PricingModel.
    Raises UnsupportedModelError for anything else (including None/empty).
    """
    if isinstance(tag, PricingModel):
        return tag

    key = str(tag or "").strip().lower()
    if not key:
        raise UnsupportedModelError(tag)

    try:
        return PricingModel(key)
    except ValueError:
        pass

    model = LEGACY_ALIASES.get(key)
    if model is None:
        raise UnsupportedModelError(tag)

    logger.debug("normalized legacy pricing model %r -> %s", tag, model.value)
    return model


def shape_for(model: Any) -> MeasurementShape:
    return _SHAPES[normalize_model(model)]


def is_area_based(model: Any) -> bool:
    return shape_for(model) is MeasurementShape.AREAS


class PricingScheme(BaseModel):
    """
    A contractor's pricing-scheme record as the persistence layer hands it over.
    `pricingRules` stays an open bag here; `.rules` gives the typed, defaulted view.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[int] = None
    name: str = ""
    type: str
    description: Optional[str] = None
    is_default: bool = Field(False, alias="isDefault")
    is_active: bool = Field(True, alias="isActive")
    pricing_rules: Dict[str, Any] = Field(default_factory=dict, alias="pricingRules")

    @property
    def model(self) -> PricingModel:
        return normalize_model(self.type)

    @property
    def rules(self) -> PricingRules:
        return PricingRules.from_bag(self.pricing_rules)
