from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from cadence.core.logging_config import logger
from cadence.pricing.schemes import MeasurementShape, PricingModel, normalize_model, shape_for

from .converters import (
    calculate_total_sqft_from_areas,
    convert_areas_to_flat_rate_items,
    convert_flat_rate_items_to_areas,
)
from .requirements import PRICING_OUTPUT_RESET, has_field

DEFAULT_PAINTERS_ON_SITE = 2
DEFAULT_PROPERTY_CONDITION = "average"

MigrationLog = List[str]
MigrationHandler = Callable[[Dict[str, Any], MigrationLog], None]
ShapePair = Tuple[MeasurementShape, MeasurementShape]


class MigrationRegistry:
    """Data handlers per (from shape, to shape); pairs without one need no conversion."""

    def __init__(self) -> None:
        self._handlers: Dict[ShapePair, MigrationHandler] = {}

    def register(self, src: MeasurementShape, dst: MeasurementShape, fn: MigrationHandler) -> None:
        if (src, dst) in self._handlers:
            raise ValueError(f"Migration already registered: {src.value} -> {dst.value}")
        self._handlers[(src, dst)] = fn

    def get(self, src: MeasurementShape, dst: MeasurementShape) -> Optional[MigrationHandler]:
        return self._handlers.get((src, dst))


migration_registry = MigrationRegistry()


def migration(src: MeasurementShape, dst: MeasurementShape):
    def deco(fn: MigrationHandler) -> MigrationHandler:
        migration_registry.register(src, dst, fn)
        return fn

    return deco


@migration(MeasurementShape.WHOLE_HOME, MeasurementShape.AREAS)
def _whole_home_to_areas(data: Dict[str, Any], log: MigrationLog) -> None:
    if not has_field(data, "areas"):
        data["areas"] = []
        log.append("Cleared areas - will need to be redefined for area-based pricing")


@migration(MeasurementShape.AREAS, MeasurementShape.WHOLE_HOME)
def _areas_to_whole_home(data: Dict[str, Any], log: MigrationLog) -> None:
    if not has_field(data, "homeSqft"):
        total_sqft = calculate_total_sqft_from_areas(data.get("areas"))
        if total_sqft > 0:
            data["homeSqft"] = total_sqft
            log.append(f"Set home sqft to {total_sqft} based on area calculations")

    data["areas"] = []
    log.append("Cleared areas data for turnkey pricing")


@migration(MeasurementShape.AREAS, MeasurementShape.AREAS)
def _areas_to_areas(data: Dict[str, Any], log: MigrationLog) -> None:
    log.append("Preserved areas data - compatible schemes")


@migration(MeasurementShape.FLAT_RATE_ITEMS, MeasurementShape.AREAS)
def _flat_rate_items_to_areas(data: Dict[str, Any], log: MigrationLog) -> None:
    if has_field(data, "flatRateItems"):
        data["areas"] = convert_flat_rate_items_to_areas(data["flatRateItems"])
        data["flatRateItems"] = {}
        log.append("Converted flat rate items to areas - review and adjust quantities")


@migration(MeasurementShape.AREAS, MeasurementShape.FLAT_RATE_ITEMS)
def _areas_to_flat_rate_items(data: Dict[str, Any], log: MigrationLog) -> None:
    if has_field(data, "areas"):
        data["flatRateItems"] = convert_areas_to_flat_rate_items(data["areas"])
        data["areas"] = []
        log.append("Converted areas to flat rate items - review and adjust quantities")


@dataclass
class MigrationResult:
    data: Dict[str, Any]
    migration_log: MigrationLog = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "migrationLog": list(self.migration_log)}


def migrate_quote_data(current_data: Optional[Dict[str, Any]], from_scheme: Any, to_scheme: Any) -> MigrationResult:
    """
    Rewrite a quote's data for a new pricing scheme.

    Works on a deep copy, so the caller's dict stays usable as the rollback source.
    Pricing output fields are always reset since they belong to the old scheme.
    """
    src = normalize_model(from_scheme)
    dst = normalize_model(to_scheme)

    data: Dict[str, Any] = copy.deepcopy(dict(current_data or {}))
    log: MigrationLog = []

    for key, value in PRICING_OUTPUT_RESET.items():
        data[key] = value

    if src == dst:
        log.append("No specific migration needed")
    else:
        handler = migration_registry.get(shape_for(src), shape_for(dst))
        if handler is None:
            log.append("No specific migration needed")
        else:
            handler(data, log)
        _inject_defaults(data, dst, log)

    logger.bind(from_scheme=src.value, to_scheme=dst.value).info("quote_data_migrated", steps=len(log))
    return MigrationResult(data=data, migration_log=log)


def _inject_defaults(data: Dict[str, Any], dst: PricingModel, log: MigrationLog) -> None:
    if dst == PricingModel.PRODUCTION_BASED and not has_field(data, "paintersOnSite"):
        data["paintersOnSite"] = DEFAULT_PAINTERS_ON_SITE
        log.append(f"Set default painters on site to {DEFAULT_PAINTERS_ON_SITE}")

    if dst == PricingModel.TURNKEY and not has_field(data, "propertyCondition"):
        data["propertyCondition"] = DEFAULT_PROPERTY_CONDITION
        log.append(f"Set default property condition to {DEFAULT_PROPERTY_CONDITION}")
