from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .money import ZERO, to_decimal, to_flag
from .money import quantity as parse_quantity

logger = logging.getLogger(__name__)

D = Decimal


class MeasurementUnit:
    SQFT = "sqft"
    LINEAR_FOOT = "linear_foot"
    UNIT = "unit"
    HOUR = "hour"

    ALL = (SQFT, LINEAR_FOOT, UNIT, HOUR)


# Older quotes stored countable items as "each"
_UNIT_ALIASES = {
    "each": MeasurementUnit.UNIT,
    "units": MeasurementUnit.UNIT,
    "sq_ft": MeasurementUnit.SQFT,
    "linear_ft": MeasurementUnit.LINEAR_FOOT,
    "lf": MeasurementUnit.LINEAR_FOOT,
    "hours": MeasurementUnit.HOUR,
}

JOB_SCOPES = ("interior", "exterior", "both")


def _records(v: Any, model: type, label: str) -> List[Any]:
    """Keep list entries that can become `model`; anything else is dropped with a warning."""
    if not isinstance(v, list):
        return []
    kept = [r for r in v if isinstance(r, (dict, model))]
    if len(kept) != len(v):
        logger.warning("dropped %d malformed %s entries", len(v) - len(kept), label)
    return kept


class LineItem(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    category_name: str = Field("", alias="categoryName")
    quantity: D = ZERO
    measurement_unit: str = Field(MeasurementUnit.SQFT, alias="measurementUnit")
    selected: bool = True

    @field_validator("category_name", mode="before")
    @classmethod
    def _category(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> D:
        return parse_quantity(v)

    @field_validator("measurement_unit", mode="before")
    @classmethod
    def _unit(cls, v: Any) -> str:
        unit = str(v or "").strip().lower()
        if not unit:
            return MeasurementUnit.SQFT
        return _UNIT_ALIASES.get(unit, unit)

    @field_validator("selected", mode="before")
    @classmethod
    def _selected(cls, v: Any) -> bool:
        return to_flag(v, default=True)

    @property
    def is_sqft(self) -> bool:
        return self.measurement_unit == MeasurementUnit.SQFT


class Area(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    name: str = "Unnamed Area"
    items: List[LineItem] = Field(
        default_factory=list, validation_alias=AliasChoices("items", "laborItems")
    )

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return str(v) if v else "Unnamed Area"

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, v: Any) -> Any:
        return _records(v, LineItem, "line item")

    def selected_items(self) -> List[LineItem]:
        return [i for i in self.items if i.selected]


FlatRateItems = Dict[str, Dict[str, int]]


def clean_flat_rate_items(raw: Any) -> FlatRateItems:
    """
    {interior|exterior: {itemKey: count}} with counts coerced to non-negative ints.
    Anything that isn't a mapping at either level is dropped.
    """
    out: FlatRateItems = {}
    if not isinstance(raw, dict):
        return out

    for side, items in raw.items():
        if not isinstance(items, dict):
            continue
        counts: Dict[str, int] = {}
        for key, count in items.items():
            n = to_decimal(count)
            counts[str(key)] = int(n) if n is not None and n > 0 else 0
        out[str(side)] = counts
    return out


class QuoteMeasurements(BaseModel):
    """
    Measurement data of one quote. Which part is meaningful depends on the
    quote's pricing model: homeSqft/jobScope (turnkey), areas (rate/production),
    areas and/or flatRateItems (flat rate).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    home_sqft: D = Field(ZERO, alias="homeSqft")
    job_scope: str = Field(
        "interior", validation_alias=AliasChoices("jobScope", "job_scope", "jobType")
    )
    areas: List[Area] = Field(default_factory=list)
    flat_rate_items: FlatRateItems = Field(default_factory=dict, alias="flatRateItems")

    @classmethod
    def from_data(cls, data: Any) -> "QuoteMeasurements":
        if isinstance(data, QuoteMeasurements):
            return data
        return cls.model_validate(data if isinstance(data, dict) else {})

    @field_validator("home_sqft", mode="before")
    @classmethod
    def _home_sqft(cls, v: Any) -> D:
        return parse_quantity(v)

    @field_validator("job_scope", mode="before")
    @classmethod
    def _job_scope(cls, v: Any) -> str:
        scope = str(v or "").strip().lower()
        return scope or "interior"

    @field_validator("areas", mode="before")
    @classmethod
    def _areas(cls, v: Any) -> Any:
        return _records(v, Area, "area")

    @field_validator("flat_rate_items", mode="before")
    @classmethod
    def _flat_rate_items(cls, v: Any) -> FlatRateItems:
        return clean_flat_rate_items(v)

    def iter_selected(self) -> Iterator[Tuple[Area, LineItem]]:
        for area in self.areas:
            for item in area.selected_items():
                yield area, item

    def selected_only(self) -> "QuoteMeasurements":
        """Copy with unselected items removed and emptied areas dropped."""
        areas = [
            a.model_copy(update={"items": a.selected_items()})
            for a in self.areas
            if a.selected_items()
        ]
        return self.model_copy(update={"areas": areas})
