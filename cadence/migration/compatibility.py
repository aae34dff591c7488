from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from cadence.pricing.schemes import MeasurementShape, PricingModel, normalize_model, shape_for

from .converters import calculate_total_sqft_from_areas
from .requirements import has_field, lost_fields, missing_fields

logger = logging.getLogger(__name__)


class CompatibilityReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_compatible: bool = Field(True, alias="isCompatible")
    warnings: List[str] = Field(default_factory=list)
    migrations: List[str] = Field(default_factory=list)
    data_loss: List[str] = Field(default_factory=list, alias="dataLoss")


def validate_scheme_compatibility(
    current_data: Optional[Mapping[str, Any]],
    from_scheme: Any,
    to_scheme: Any,
) -> CompatibilityReport:
    """
    Dry-run report for moving a quote from one pricing scheme to another.
    Never touches `current_data`.
    """
    src = normalize_model(from_scheme)
    dst = normalize_model(to_scheme)
    data: Mapping[str, Any] = current_data or {}
    report = CompatibilityReport()

    missing = missing_fields(data, dst)
    if missing:
        report.warnings.append(f"Target scheme requires: {', '.join(missing)}")

    lost = lost_fields(src, dst)
    if lost:
        report.data_loss.extend(lost)
        report.warnings.append(f"Data will be lost: {', '.join(lost)}")

    if src != dst:
        _check_shape_change(report, data, shape_for(src), shape_for(dst))
        _plan_defaults(report, data, dst)

    logger.debug(
        "scheme compatibility %s -> %s: compatible=%s warnings=%d",
        src.value,
        dst.value,
        report.is_compatible,
        len(report.warnings),
    )
    return report


def _check_shape_change(
    report: CompatibilityReport,
    data: Mapping[str, Any],
    src: MeasurementShape,
    dst: MeasurementShape,
) -> None:
    has_areas = has_field(data, "areas")
    has_flat_items = has_field(data, "flatRateItems")

    if src == MeasurementShape.FLAT_RATE_ITEMS and dst == MeasurementShape.AREAS and has_flat_items:
        report.migrations.append("Convert flat rate items to areas")
        report.warnings.append("Flat rate items will be converted to areas - review quantities")
    elif dst == MeasurementShape.AREAS and not has_areas:
        report.is_compatible = False
        report.warnings.append("Areas must be defined before switching to area-based pricing")
    elif src == MeasurementShape.AREAS and dst == MeasurementShape.AREAS:
        report.migrations.append("Preserve areas data")

    if src == MeasurementShape.AREAS and dst == MeasurementShape.WHOLE_HOME:
        if not has_field(data, "homeSqft"):
            report.warnings.append("Home square footage should be set for turnkey pricing")
            if calculate_total_sqft_from_areas(data.get("areas")) > 0:
                report.migrations.append("Set home sqft from area measurements")
        if has_areas:
            report.migrations.append("Clear areas data")

    if src == MeasurementShape.AREAS and dst == MeasurementShape.FLAT_RATE_ITEMS and has_areas:
        report.migrations.append("Convert areas to flat rate items")
        report.warnings.append("Areas will be converted to flat rate items - review quantities")


def _plan_defaults(report: CompatibilityReport, data: Mapping[str, Any], dst: PricingModel) -> None:
    if dst == PricingModel.PRODUCTION_BASED and not has_field(data, "paintersOnSite"):
        report.migrations.append("Set default painters on site")
    if dst == PricingModel.TURNKEY and not has_field(data, "propertyCondition"):
        report.migrations.append("Set default property condition")
