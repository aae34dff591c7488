from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from jsonschema import validate

from cadence.core.settings import settings

from ..rules import PricingRules
from ..schemes import PricingModel, PricingScheme, normalize_model

logger = logging.getLogger(__name__)

CATALOG_DIR = Path(__file__).parent
DEFAULT_CATALOG_PATH = CATALOG_DIR / "default_schemes.yaml"
SCHEMA_PATH = CATALOG_DIR / "scheme_catalog.schema.json"


def _catalog_path(path: Optional[Union[str, Path]]) -> Path:
    if path is not None:
        return Path(path)
    if settings.SCHEME_CATALOG_PATH:
        return Path(settings.SCHEME_CATALOG_PATH)
    return DEFAULT_CATALOG_PATH


def load_catalog(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load + validate a scheme catalog YAML file. Raises on a missing file,
    invalid YAML, or a document that doesn't match the catalog schema.
    """
    catalog_path = _catalog_path(path)

    with catalog_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        schema = json.load(f)

    validate(instance=raw, schema=schema)
    logger.debug("loaded scheme catalog %s (%d schemes)", catalog_path, len(raw["schemes"]))
    return raw


def load_default_schemes(path: Optional[Union[str, Path]] = None) -> List[PricingScheme]:
    """The seed schemes, in catalog order, as PricingScheme records."""
    return [PricingScheme.model_validate(s) for s in load_catalog(path)["schemes"]]


def default_scheme_for(model: Any, path: Optional[Union[str, Path]] = None) -> PricingScheme:
    wanted = normalize_model(model)
    for scheme in load_default_schemes(path):
        if scheme.model is wanted:
            return scheme
    raise LookupError(f"No default scheme for pricing model '{wanted.value}'")


def _money(x: Decimal) -> str:
    return f"${x:,.2f}"


def describe_rules(scheme: PricingScheme) -> str:
    """Human-readable one-line summary of what a scheme charges."""
    rules: PricingRules = scheme.rules
    model = scheme.model
    parts: List[str] = []

    if model is PricingModel.TURNKEY:
        parts.append(f"{_money(rules.turnkey_rate)}/sq ft whole-home")
        if rules.interior_rate is not None:
            parts.append(f"interior {_money(rules.interior_rate)}/sq ft")
        if rules.exterior_rate is not None:
            parts.append(f"exterior {_money(rules.exterior_rate)}/sq ft")

    elif model is PricingModel.RATE_BASED_SQFT:
        lr = rules.labor_rates
        parts.append(
            f"walls {_money(lr.walls)}/sq ft, ceilings {_money(lr.ceilings)}/sq ft, "
            f"trim {_money(lr.trim)}/LF, doors {_money(lr.doors)}/unit, "
            f"cabinets {_money(lr.cabinets)}/unit"
        )

    elif model is PricingModel.PRODUCTION_BASED:
        pr = rules.production_rates
        parts.append(f"{_money(rules.hourly_labor_rate)}/hour")
        parts.append(
            f"walls {pr.walls} sq ft/hr, ceilings {pr.ceilings} sq ft/hr, trim {pr.trim} LF/hr"
        )

    else:
        up = rules.unit_prices
        parts.append(
            f"door {_money(up.door)}, window {_money(up.window)}, "
            f"rooms {_money(up.room_small)}/{_money(up.room_medium)}/{_money(up.room_large)}"
        )

    if rules.include_materials:
        parts.append(
            f"materials included ({rules.coats} coats, {rules.coverage} sq ft/gal, "
            f"{_money(rules.cost_per_gallon)}/gal, {rules.application_method})"
        )
    else:
        parts.append("labor only")

    return "; ".join(parts)
