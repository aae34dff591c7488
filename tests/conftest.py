from __future__ import annotations

from datetime import datetime, timezone
import pytest


@pytest.fixture
def fixed_now():
    return datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def living_room():
    return {
        "id": "area-1",
        "name": "Living Room",
        "items": [
            {"categoryName": "Walls", "quantity": 400, "measurementUnit": "sqft", "selected": True},
            {"categoryName": "Ceiling", "quantity": 200, "measurementUnit": "sqft", "selected": True},
            {"categoryName": "Trim", "quantity": 60, "measurementUnit": "linear_foot", "selected": True},
            {"categoryName": "Doors", "quantity": 2, "measurementUnit": "unit", "selected": True},
        ],
    }


@pytest.fixture
def rate_based_scheme():
    return {
        "id": 7,
        "name": "Rate-Based Square Foot Pricing",
        "type": "rate_based_sqft",
        "isDefault": False,
        "isActive": True,
        "pricingRules": {
            "includeMaterials": True,
            "coverage": 350,
            "applicationMethod": "roll",
            "coats": 2,
            "costPerGallon": 40,
            "laborRates": {"walls": 0.55, "ceilings": 0.65, "trim": 2.50, "doors": 45, "cabinets": 65},
        },
    }


@pytest.fixture
def full_markup_settings():
    return {
        "laborMarkupPercent": "10",
        "materialMarkupPercent": "20",
        "overheadPercent": "10",
        "profitMarginPercent": "10",
        "taxRatePercentage": "8.25",
        "depositPercent": "50",
    }
