from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from cadence.core.settings import settings as app_settings

from .money import ZERO, qmoney, to_decimal
from .results import BasePricing, FinalPricing

D = Decimal
HUNDRED = D("100")


def _percent(v: Any) -> D:
    d = to_decimal(v)
    return d if d is not None else ZERO


class MarkupSettings(BaseModel):
    """
    The contractor-settings slice the markup layer needs. Percentages are opt-in
    (absent means 0) except the deposit, which defaults to the configured 50%.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    labor_markup_percent: D = Field(ZERO, alias="laborMarkupPercent")
    material_markup_percent: D = Field(ZERO, alias="materialMarkupPercent")
    overhead_percent: D = Field(ZERO, alias="overheadPercent")
    profit_margin_percent: D = Field(
        ZERO,
        validation_alias=AliasChoices(
            "profitMarginPercent", "netProfitPercent", "profit_margin_percent"
        ),
    )
    tax_rate_percentage: D = Field(
        ZERO,
        validation_alias=AliasChoices(
            "taxRatePercentage", "taxPercent", "tax_rate_percentage"
        ),
    )
    deposit_percent: Optional[D] = Field(None, alias="depositPercent")

    @classmethod
    def from_data(cls, data: Any) -> "MarkupSettings":
        if isinstance(data, MarkupSettings):
            return data
        return cls.model_validate(data if isinstance(data, dict) else {})

    @field_validator(
        "labor_markup_percent",
        "material_markup_percent",
        "overhead_percent",
        "profit_margin_percent",
        "tax_rate_percentage",
        mode="before",
    )
    @classmethod
    def _pct(cls, v: Any) -> D:
        return _percent(v)

    @field_validator("deposit_percent", mode="before")
    @classmethod
    def _deposit(cls, v: Any) -> Optional[D]:
        d = to_decimal(v)
        if d is None:
            return None
        return min(max(d, ZERO), HUNDRED)

    @property
    def effective_deposit_percent(self) -> D:
        if self.deposit_percent is not None:
            return self.deposit_percent
        return min(max(D(str(app_settings.DEFAULT_DEPOSIT_PERCENT)), ZERO), HUNDRED)


def _scale(amount: D, pct: D) -> D:
    return amount * pct / HUNDRED


def apply_markups_and_tax(base: BasePricing, settings: Any = None) -> FinalPricing:
    """
    Strictly ordered pipeline on top of base labor/material cost:

      markups (labor, material separately) -> overhead -> profit -> tax -> deposit

    Arithmetic runs at full precision; amounts are rounded to cents only on output.
    The two sums the customer sees are kept exact after rounding:
    total = subtotal + tax and deposit + balance = total.
    """
    s = MarkupSettings.from_data(settings)

    labor = base.labor_cost or ZERO
    material = base.material_cost or ZERO

    labor_markup = _scale(labor, s.labor_markup_percent)
    labor_with_markup = labor + labor_markup

    material_markup = _scale(material, s.material_markup_percent)
    material_with_markup = material + material_markup

    before_overhead = labor_with_markup + material_with_markup

    overhead = _scale(before_overhead, s.overhead_percent)
    before_profit = before_overhead + overhead

    profit = _scale(before_profit, s.profit_margin_percent)
    subtotal = before_profit + profit

    tax = _scale(subtotal, s.tax_rate_percentage)

    subtotal_q = qmoney(subtotal)
    tax_q = qmoney(tax)
    total_q = subtotal_q + tax_q

    deposit_pct = s.effective_deposit_percent
    deposit_q = qmoney(_scale(total_q, deposit_pct))
    balance_q = total_q - deposit_q

    return FinalPricing(
        model=base.model,
        labor_total=qmoney(labor),
        material_total=qmoney(material),
        labor_markup_percent=qmoney(s.labor_markup_percent),
        labor_markup_amount=qmoney(labor_markup),
        labor_cost_with_markup=qmoney(labor_with_markup),
        material_markup_percent=qmoney(s.material_markup_percent),
        material_markup_amount=qmoney(material_markup),
        material_cost_with_markup=qmoney(material_with_markup),
        subtotal_before_overhead=qmoney(before_overhead),
        overhead_percent=qmoney(s.overhead_percent),
        overhead=qmoney(overhead),
        subtotal_before_profit=qmoney(before_profit),
        profit_margin_percent=qmoney(s.profit_margin_percent),
        profit_amount=qmoney(profit),
        subtotal=subtotal_q,
        tax_percent=qmoney(s.tax_rate_percentage),
        tax=tax_q,
        total=total_q,
        deposit_percent=qmoney(deposit_pct),
        deposit=deposit_q,
        balance=balance_q,
        total_sqft=base.total_sqft,
        total_hours=base.total_hours,
        gallons=base.gallons,
        breakdown=base.breakdown,
    )
