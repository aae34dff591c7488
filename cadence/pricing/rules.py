from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .money import positive_or, to_flag

D = Decimal

# Shared material defaults (every model)
DEFAULT_COVERAGE = D("350")
SPRAY_COVERAGE = D("300")
DEFAULT_COATS = D("2")
DEFAULT_COST_PER_GALLON = D("40")
DEFAULT_APPLICATION_METHOD = "roll"

DEFAULT_TURNKEY_RATE = D("3.50")
DEFAULT_HOURLY_LABOR_RATE = D("50")

# Share of an all-in price attributed to labor when materials are included
LABOR_SHARE = D("0.60")
MATERIAL_SHARE = D("0.40")


class _DefaultedRates(BaseModel):
    """
    Per-category rate table. Every field carries its default; a missing, zero,
    negative or unreadable value in the stored bag falls back to that default.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _fallback_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        default = cls.model_fields[info.field_name].default
        return positive_or(v, default)


class LaborRates(_DefaultedRates):
    walls: D = D("0.55")  # per sqft
    ceilings: D = D("0.65")  # per sqft
    trim: D = D("2.50")  # per linear ft
    doors: D = D("45")  # per unit
    cabinets: D = D("65")  # per unit


class ProductionRates(_DefaultedRates):
    # sqft (or linear ft) per hour
    walls: D = D("300")
    ceilings: D = D("250")
    trim: D = D("75")


class UnitPrices(_DefaultedRates):
    door: D = D("85")
    window: D = D("75")
    room_small: D = D("350")
    room_medium: D = D("500")
    room_large: D = D("750")


_NUMERIC_DEFAULTS: Dict[str, D] = {
    "coverage": DEFAULT_COVERAGE,
    "coats": DEFAULT_COATS,
    "cost_per_gallon": DEFAULT_COST_PER_GALLON,
    "turnkey_rate": DEFAULT_TURNKEY_RATE,
    "hourly_labor_rate": DEFAULT_HOURLY_LABOR_RATE,
}


class PricingRules(BaseModel):
    """
    Typed view of a scheme's `pricingRules` bag.

    Every recognized option and its default lives here, so calculators only ever
    see fully populated values. Keys use the stored camelCase names.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    # Materials (all models)
    include_materials: bool = Field(True, alias="includeMaterials")
    coverage: D = DEFAULT_COVERAGE
    application_method: str = Field(DEFAULT_APPLICATION_METHOD, alias="applicationMethod")
    coats: D = DEFAULT_COATS
    cost_per_gallon: D = Field(DEFAULT_COST_PER_GALLON, alias="costPerGallon")

    # turnkey
    turnkey_rate: D = Field(DEFAULT_TURNKEY_RATE, alias="turnkeyRate")
    interior_rate: Optional[D] = Field(None, alias="interiorRate")
    exterior_rate: Optional[D] = Field(None, alias="exteriorRate")

    # rate_based_sqft
    labor_rates: LaborRates = Field(default_factory=LaborRates, alias="laborRates")

    # production_based
    production_rates: ProductionRates = Field(
        default_factory=ProductionRates, alias="productionRates"
    )
    hourly_labor_rate: D = Field(DEFAULT_HOURLY_LABOR_RATE, alias="hourlyLaborRate")
    crew_size: Optional[int] = Field(None, alias="crewSize")

    # flat_rate_unit
    unit_prices: UnitPrices = Field(default_factory=UnitPrices, alias="unitPrices")

    @classmethod
    def from_bag(cls, bag: Any) -> "PricingRules":
        if isinstance(bag, PricingRules):
            return bag
        return cls.model_validate(bag if isinstance(bag, dict) else {})

    @field_validator("include_materials", mode="before")
    @classmethod
    def _include_materials(cls, v: Any) -> bool:
        return to_flag(v, default=True)

    @field_validator(*_NUMERIC_DEFAULTS.keys(), mode="before")
    @classmethod
    def _numeric_default(cls, v: Any, info: ValidationInfo) -> Any:
        return positive_or(v, _NUMERIC_DEFAULTS[info.field_name])

    @field_validator("interior_rate", "exterior_rate", mode="before")
    @classmethod
    def _optional_rate(cls, v: Any) -> Any:
        return positive_or(v, None)

    @field_validator("application_method", mode="before")
    @classmethod
    def _method(cls, v: Any) -> str:
        method = str(v or "").strip().lower()
        return method or DEFAULT_APPLICATION_METHOD

    @field_validator("crew_size", mode="before")
    @classmethod
    def _crew_size(cls, v: Any) -> Optional[int]:
        size = positive_or(v, None)
        return int(size) if size is not None and size >= 1 else None

    @field_validator("labor_rates", "production_rates", "unit_prices", mode="before")
    @classmethod
    def _rate_table(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, BaseModel)) else {}
