from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from cadence.core.logging_config import logger
from cadence.core.settings import settings as app_settings

from .engine import calculate_pricing
from .markup import MarkupSettings, apply_markups_and_tax
from .measurements import QuoteMeasurements
from .money import to_decimal
from .results import QuotePricing
from .schemes import PricingScheme


def _validity_days(contractor_settings: Dict[str, Any]) -> int:
    days = to_decimal(contractor_settings.get("quoteValidityDays"))
    if days is None or days <= 0:
        return app_settings.QUOTE_VALIDITY_DAYS
    return int(days)


def price_quote(
    scheme: Any,
    quote: Any,
    contractor_settings: Optional[Dict[str, Any]] = None,
    *,
    now: Optional[datetime] = None,
) -> QuotePricing:
    """
    Price one quote end to end, the way the quote builder stores it:

    1. resolve the scheme's model and typed rules
    2. keep only selected items (areas left empty are dropped)
    3. base pricing, then markups/overhead/profit/tax/deposit
    4. attach validity date and the material settings that were used

    `scheme` is a PricingScheme or its stored dict; `quote` is the quote's
    measurement data; `contractor_settings` is the tenant's settings record.
    """
    if not isinstance(scheme, PricingScheme):
        scheme = PricingScheme.model_validate(scheme)
    contractor_settings = dict(contractor_settings or {})
    now = now or datetime.now(timezone.utc)

    rules = scheme.rules
    measurements = QuoteMeasurements.from_data(quote).selected_only()

    base = calculate_pricing(scheme.model, rules, measurements)
    final = apply_markups_and_tax(base, MarkupSettings.from_data(contractor_settings))

    days = _validity_days(contractor_settings)

    logger.bind(scheme=scheme.name, model=scheme.model.value).info(
        "quote_priced", total=str(final.total), valid_days=days
    )

    return QuotePricing(
        **final.model_dump(),
        include_materials=rules.include_materials,
        coverage=rules.coverage,
        application_method=rules.application_method,
        coats=rules.coats,
        quote_validity_days=days,
        valid_until=(now + timedelta(days=days)).date(),
    )
