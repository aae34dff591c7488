from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .money import ZERO, to_decimal
from .money import quantity as parse_quantity

logger = logging.getLogger(__name__)

D = Decimal


class Calculation(str, Enum):
    PERIMETER = "perimeter"
    AREA = "area"
    LINEAR = "linear"
    UNIT = "unit"
    LINEAR_OR_AREA = "linear_or_area"
    FLEXIBLE = "flexible"


@dataclass(frozen=True)
class SurfaceDimensionConfig:
    """Which measurements a surface type takes and how they become a quantity."""

    calculation: Calculation
    unit: str
    formula: str
    description: str
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()
    standard_size: Optional[D] = None  # sqft of one piece when no height/width given
    alternate_unit: Optional[str] = None
    multiply_by_height: bool = False


SURFACE_DIMENSION_CONFIG: Dict[str, SurfaceDimensionConfig] = {
    "walls": SurfaceDimensionConfig(
        calculation=Calculation.PERIMETER,
        unit="sq ft",
        formula="(length + width) * 2 * height",
        description="Calculate wall area using room dimensions",
        required=("length", "height"),
        optional=("width",),
    ),
    "ceiling": SurfaceDimensionConfig(
        calculation=Calculation.AREA,
        unit="sq ft",
        formula="length * width",
        description="Calculate ceiling area",
        required=("length", "width"),
    ),
    "trim": SurfaceDimensionConfig(
        calculation=Calculation.LINEAR,
        unit="linear ft",
        formula="linearFeet",
        description="Measure trim in linear feet",
        required=("linearFeet",),
        optional=("height",),
    ),
    "doors": SurfaceDimensionConfig(
        calculation=Calculation.UNIT,
        unit="each",
        formula="count * (height * width || standardSize)",
        description="Count doors or measure individually",
        required=("count",),
        optional=("height", "width"),
        standard_size=D("21"),  # 7ft x 3ft
    ),
    "windows": SurfaceDimensionConfig(
        calculation=Calculation.UNIT,
        unit="each",
        formula="count * (height * width || standardSize)",
        description="Count windows or measure individually",
        required=("count",),
        optional=("height", "width"),
        standard_size=D("15"),
    ),
    "cabinets": SurfaceDimensionConfig(
        calculation=Calculation.LINEAR_OR_AREA,
        unit="linear ft",
        formula="linearFeet || (width * height)",
        description="Measure cabinet fronts in linear feet or total area",
        required=("linearFeet",),
        optional=("height", "depth"),
        alternate_unit="sq ft",
    ),
    "shutters": SurfaceDimensionConfig(
        calculation=Calculation.UNIT,
        unit="each",
        formula="count",
        description="Count individual shutters",
        required=("count",),
        optional=("height", "width"),
    ),
    "deck": SurfaceDimensionConfig(
        calculation=Calculation.AREA,
        unit="sq ft",
        formula="length * width",
        description="Calculate deck surface area",
        required=("length", "width"),
    ),
    "fence": SurfaceDimensionConfig(
        calculation=Calculation.LINEAR,
        unit="linear ft",
        formula="linearFeet * height",
        description="Measure fence in linear feet with height",
        required=("linearFeet", "height"),
        multiply_by_height=True,
    ),
    "garageDoor": SurfaceDimensionConfig(
        calculation=Calculation.UNIT,
        unit="each",
        formula="count * (height * width || standardSize)",
        description="Count garage doors",
        required=("count",),
        optional=("height", "width"),
        standard_size=D("120"),  # 16ft x 7.5ft two-car door
    ),
    "custom": SurfaceDimensionConfig(
        calculation=Calculation.FLEXIBLE,
        unit="sq ft",
        formula="user_defined",
        description="Custom surface with flexible measurements",
        optional=("length", "width", "height", "linearFeet", "count", "directArea"),
    ),
}

# Free-text surface names (whitespace removed, lower-cased) -> config key
SURFACE_TYPE_ALIASES: Dict[str, str] = {
    "wall": "walls",
    "walls": "walls",
    "ceiling": "ceiling",
    "ceilings": "ceiling",
    "trim": "trim",
    "baseboard": "trim",
    "crownmolding": "trim",
    "door": "doors",
    "doors": "doors",
    "window": "windows",
    "windows": "windows",
    "cabinet": "cabinets",
    "cabinets": "cabinets",
    "shutter": "shutters",
    "shutters": "shutters",
    "deck": "deck",
    "fence": "fence",
    "garagedoor": "garageDoor",
    "garage": "garageDoor",
}


def surface_key(surface_type: Any) -> str:
    normalized = re.sub(r"\s+", "", str(surface_type or "")).lower()
    return SURFACE_TYPE_ALIASES.get(normalized, "custom")


def get_dimension_fields(surface_type: Any) -> SurfaceDimensionConfig:
    """Config for a surface type; anything unrecognized is a custom surface."""
    return SURFACE_DIMENSION_CONFIG[surface_key(surface_type)]


class Dimensions(BaseModel):
    """Field measurements in feet (count for countable surfaces). Unreadable or negative values are 0."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    length: D = ZERO
    width: D = ZERO
    height: D = ZERO
    depth: D = ZERO
    linear_feet: D = Field(ZERO, alias="linearFeet")
    count: D = ZERO
    direct_area: D = Field(ZERO, alias="directArea")

    @classmethod
    def from_data(cls, data: Any) -> "Dimensions":
        if isinstance(data, Dimensions):
            return data
        return cls.model_validate(data if isinstance(data, dict) else {})

    @field_validator("*", mode="before")
    @classmethod
    def _measurement(cls, v: Any) -> D:
        return parse_quantity(v)


def calculate_surface_area(dimensions: Any, surface_type: Any) -> D:
    """
    Quantity for one surface from its measurements: sqft for walls, ceilings, decks and
    counted pieces; linear ft for trim and cabinets (fence: linear ft x height).
    A direct area always wins. Missing measurements give 0.
    """
    config = get_dimension_fields(surface_type)
    d = Dimensions.from_data(dimensions)

    if d.direct_area > 0:
        return d.direct_area

    calc = config.calculation

    if calc is Calculation.PERIMETER:
        if d.length and d.width and d.height:
            return (d.length + d.width) * 2 * d.height
        if d.length and d.height:
            return d.length * d.height  # single wall
        return ZERO

    if calc is Calculation.AREA:
        return d.length * d.width

    if calc is Calculation.LINEAR:
        if not d.linear_feet:
            return ZERO
        if config.multiply_by_height and d.height:
            return d.linear_feet * d.height
        return d.linear_feet

    if calc is Calculation.UNIT:
        if not d.count:
            return ZERO
        if d.height and d.width:
            return d.count * d.height * d.width
        return d.count * (config.standard_size or D("1"))

    if calc is Calculation.LINEAR_OR_AREA:
        if d.linear_feet:
            return d.linear_feet
        return d.width * d.height

    return ZERO


@dataclass(frozen=True)
class DimensionCheck:
    valid: bool
    errors: List[str] = field(default_factory=list)


def _positive(dimensions: Mapping[str, Any], name: str) -> bool:
    value = to_decimal(dimensions.get(name))
    return value is not None and value > 0


def validate_dimensions(dimensions: Any, surface_type: Any) -> DimensionCheck:
    """Every required measurement must be a positive number; custom surfaces need at least one."""
    config = get_dimension_fields(surface_type)
    raw: Mapping[str, Any] = dimensions if isinstance(dimensions, Mapping) else {}
    errors: List[str] = []

    for name in config.required:
        if not _positive(raw, name):
            errors.append(f"{name} is required for {surface_type}")

    if config.calculation is Calculation.FLEXIBLE and not _positive(raw, "directArea"):
        if not any(_positive(raw, name) for name in config.optional):
            errors.append("At least one measurement is required")

    if errors:
        logger.debug("invalid dimensions for %r: %s", surface_type, errors)
    return DimensionCheck(valid=not errors, errors=errors)
