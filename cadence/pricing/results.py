from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .money import ZERO
from .schemes import PricingModel

D = Decimal


class _Output(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class BreakdownLine(_Output):
    """How one line item contributed. Which rate fields are set depends on the model."""

    area_name: Optional[str] = Field(None, alias="areaName")
    category: str = ""
    category_tag: Optional[str] = Field(None, alias="categoryTag")
    quantity: D = ZERO
    unit: Optional[str] = None

    labor_rate: Optional[D] = Field(None, alias="laborRate")
    production_rate: Optional[D] = Field(None, alias="productionRate")
    hours: Optional[D] = None
    hourly_rate: Optional[D] = Field(None, alias="hourlyRate")
    unit_price: Optional[D] = Field(None, alias="unitPrice")

    labor_cost: Optional[D] = Field(None, alias="laborCost")
    cost: Optional[D] = None


class MaterialCost(_Output):
    material_cost: D = Field(ZERO, alias="materialCost")
    gallons: int = 0
    cost_per_gallon: D = Field(ZERO, alias="costPerGallon")
    coats: Optional[D] = None
    coverage: Optional[D] = None
    application_method: Optional[str] = Field(None, alias="applicationMethod")


class BasePricing(_Output):
    """
    Engine output before markup/tax. Full precision; `total == laborCost + materialCost`.
    """

    model: PricingModel
    labor_cost: D = Field(ZERO, alias="laborCost")
    material_cost: D = Field(ZERO, alias="materialCost")
    gallons: int = 0
    subtotal: D = ZERO
    total: D = ZERO
    include_materials: bool = Field(True, alias="includeMaterials")

    # area-based models
    total_sqft: Optional[D] = Field(None, alias="totalSqft")
    total_hours: Optional[D] = Field(None, alias="totalHours")
    hourly_labor_rate: Optional[D] = Field(None, alias="hourlyLaborRate")
    crew_size: Optional[int] = Field(None, alias="crewSize")
    crew_hours: Optional[int] = Field(None, alias="crewHours")

    # turnkey
    home_sqft: Optional[D] = Field(None, alias="homeSqft")
    rate: Optional[D] = None
    job_scope: Optional[str] = Field(None, alias="jobScope")

    breakdown: List[BreakdownLine] = Field(default_factory=list)


class FinalPricing(_Output):
    """Customer-facing totals. Every money field is rounded to cents."""

    model: PricingModel

    labor_total: D = Field(alias="laborTotal")
    material_total: D = Field(alias="materialTotal")

    labor_markup_percent: D = Field(alias="laborMarkupPercent")
    labor_markup_amount: D = Field(alias="laborMarkupAmount")
    labor_cost_with_markup: D = Field(alias="laborCostWithMarkup")

    material_markup_percent: D = Field(alias="materialMarkupPercent")
    material_markup_amount: D = Field(alias="materialMarkupAmount")
    material_cost_with_markup: D = Field(alias="materialCostWithMarkup")

    subtotal_before_overhead: D = Field(alias="subtotalBeforeOverhead")
    overhead_percent: D = Field(alias="overheadPercent")
    overhead: D
    subtotal_before_profit: D = Field(alias="subtotalBeforeProfit")

    profit_margin_percent: D = Field(alias="profitMarginPercent")
    profit_amount: D = Field(alias="profitAmount")

    subtotal: D
    tax_percent: D = Field(alias="taxPercent")
    tax: D
    total: D

    deposit_percent: D = Field(alias="depositPercent")
    deposit: D
    balance: D

    total_sqft: Optional[D] = Field(None, alias="totalSqft")
    total_hours: Optional[D] = Field(None, alias="totalHours")
    gallons: int = 0
    breakdown: List[BreakdownLine] = Field(default_factory=list)


class QuotePricing(FinalPricing):
    """FinalPricing plus the quote-level context a priced quote is stored with."""

    include_materials: bool = Field(True, alias="includeMaterials")
    coverage: D
    application_method: str = Field(alias="applicationMethod")
    coats: D
    quote_validity_days: int = Field(alias="quoteValidityDays")
    valid_until: date = Field(alias="validUntil")
