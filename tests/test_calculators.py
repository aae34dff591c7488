from decimal import Decimal

import pytest

from cadence.pricing import calculators
from cadence.pricing.calculators.production import estimate_crew_hours
from cadence.pricing.engine import calculate_pricing
from cadence.pricing.schemes import PricingModel


# --- turnkey ---


def test_turnkey_happy_default_rate():
    out = calculate_pricing("turnkey", {}, {"homeSqft": 2000})
    assert out.total == Decimal("7000")
    assert out.labor_cost == Decimal("4200")
    assert out.material_cost == Decimal("2800")
    assert out.breakdown == []
    assert out.rate == Decimal("3.50")


def test_turnkey_scope_rates():
    rules = {"turnkeyRate": 3.50, "interiorRate": 3.25, "exteriorRate": 3.75}
    assert calculate_pricing("turnkey", rules, {"homeSqft": 2000, "jobScope": "interior"}).total == Decimal("6500")
    assert calculate_pricing("turnkey", rules, {"homeSqft": 2000, "jobScope": "exterior"}).total == Decimal("7500")
    assert calculate_pricing("turnkey", rules, {"homeSqft": 2000, "jobScope": "both"}).total == Decimal("7000")


def test_turnkey_exterior_without_exterior_rate_uses_turnkey_rate():
    out = calculate_pricing("turnkey", {"interiorRate": 3.25}, {"homeSqft": 1000, "jobScope": "exterior"})
    assert out.total == Decimal("3500")


def test_turnkey_labor_only():
    out = calculate_pricing("turnkey", {"includeMaterials": False}, {"homeSqft": 2000})
    assert out.labor_cost == Decimal("7000")
    assert out.material_cost == Decimal("0")


def test_turnkey_missing_home_sqft_is_zero():
    assert calculate_pricing("turnkey", {}, {}).total == Decimal("0")


# --- rate based ---


def test_rate_based_happy(living_room):
    out = calculate_pricing("rate_based_sqft", {}, {"areas": [living_room]})
    # 400*.55 + 200*.65 + 60*2.50 + 2*45
    assert out.labor_cost == Decimal("590")
    # 600 sqft * 2 coats / 350 -> 4 gallons
    assert out.gallons == 4
    assert out.material_cost == Decimal("160")
    assert out.total == Decimal("750")
    assert out.total_sqft == Decimal("600")
    assert len(out.breakdown) == 4


def test_rate_based_labor_only(living_room):
    out = calculate_pricing("rate_based_sqft", {"includeMaterials": False}, {"areas": [living_room]})
    assert out.material_cost == Decimal("0")
    assert out.total == Decimal("590")


def test_rate_based_edge_trim_door_priced_as_trim():
    area = {"name": "Hall", "items": [{"categoryName": "Trim Door", "quantity": 10, "measurementUnit": "linear_foot"}]}
    out = calculate_pricing("rate_based_sqft", {}, {"areas": [area]})
    assert out.breakdown[0].category_tag == "trim"
    assert out.labor_cost == Decimal("25")


def test_rate_based_unknown_category_contributes_zero():
    area = {"name": "Deck", "items": [{"categoryName": "Pressure Washing", "quantity": 300, "measurementUnit": "sqft"}]}
    out = calculate_pricing("rate_based_sqft", {}, {"areas": [area]})
    assert out.labor_cost == Decimal("0")
    assert out.breakdown[0].labor_rate == Decimal("0")
    # sqft still counts for paint
    assert out.gallons == 2


def test_rate_based_skips_unselected(living_room):
    living_room["items"][0]["selected"] = False
    out = calculate_pricing("rate_based_sqft", {}, {"areas": [living_room]})
    assert out.labor_cost == Decimal("370")
    assert len(out.breakdown) == 3


def test_rate_based_no_areas():
    out = calculate_pricing("rate_based_sqft", {}, {"areas": []})
    assert out.total == Decimal("0")
    assert out.gallons == 0


# --- production based ---


def test_production_happy():
    area = {
        "name": "Living Room",
        "items": [
            {"categoryName": "Walls", "quantity": 600, "measurementUnit": "sqft"},
            {"categoryName": "Ceiling", "quantity": 250, "measurementUnit": "sqft"},
            {"categoryName": "Trim", "quantity": 150, "measurementUnit": "linear_foot"},
            {"categoryName": "Doors", "quantity": 2, "measurementUnit": "unit"},
        ],
    }
    out = calculate_pricing("production_based", {"crewSize": 2}, {"areas": [area]})
    # 600/300 + 250/250 + 150/75 = 5 hours at $50
    assert out.total_hours == Decimal("5.00")
    assert out.labor_cost == Decimal("250")
    # 850 sqft -> 5 gallons
    assert out.gallons == 5
    assert out.material_cost == Decimal("200")
    assert out.total == Decimal("450")
    assert out.crew_size == 2
    assert out.crew_hours == 3
    # doors have no production rate: no hours, no line
    assert [b.category for b in out.breakdown] == ["Walls", "Ceiling", "Trim"]


def test_production_custom_hourly_rate():
    area = {"items": [{"categoryName": "Walls", "quantity": 300}]}
    out = calculate_pricing("production_based", {"hourlyLaborRate": 65}, {"areas": [area]})
    assert out.labor_cost == Decimal("65")
    assert out.breakdown[0].hours == Decimal("1.00")


def test_crew_hours_round_up():
    assert estimate_crew_hours(Decimal("5"), 2) == 3
    assert estimate_crew_hours(Decimal("4"), 2) == 2
    assert estimate_crew_hours(Decimal("0"), 2) == 0


# --- flat rate ---


def test_flat_rate_area_items():
    area = {
        "name": "Upstairs",
        "items": [
            {"categoryName": "Interior Door", "quantity": 3, "measurementUnit": "unit"},
            {"categoryName": "Bedroom Window", "quantity": 2, "measurementUnit": "unit"},
            {"categoryName": "Large Room", "quantity": 1, "measurementUnit": "unit"},
            {"categoryName": "Bonus Room", "quantity": 1, "measurementUnit": "unit"},
        ],
    }
    out = calculate_pricing("flat_rate_unit", {}, {"areas": [area]})
    # 3*85 + 2*75 + 750 + 500
    assert out.total == Decimal("1655")
    assert out.labor_cost == Decimal("993.00")
    assert out.material_cost == Decimal("662.00")


def test_flat_rate_items_counts():
    data = {"flatRateItems": {"interior": {"doors": 2, "smallRooms": 1}, "exterior": {"windows": 4}}}
    out = calculate_pricing("flat_rate_unit", {"includeMaterials": False}, data)
    # 2*85 + 350 + 4*75
    assert out.total == Decimal("820")
    assert out.labor_cost == Decimal("820")
    assert out.material_cost == Decimal("0")
    assert {b.area_name for b in out.breakdown} == {"Interior", "Exterior"}


def test_flat_rate_unknown_item_is_free():
    area = {"items": [{"categoryName": "Wall Repair", "quantity": 3, "measurementUnit": "unit"}]}
    out = calculate_pricing("flat_rate_unit", {}, {"areas": [area]})
    assert out.total == Decimal("0")
    assert out.breakdown[0].unit_price == Decimal("0")


# --- registry ---


def test_every_model_has_a_calculator():
    for model in PricingModel:
        assert calculators.get_calculator(model) is not None


def test_duplicate_registration_fails():
    with pytest.raises(ValueError):

        @calculators.register(PricingModel.TURNKEY)
        def other(rules, m):  # pragma: no cover
            return None


@pytest.mark.parametrize(
    "model, data",
    [
        ("turnkey", {"homeSqft": 1777}),
        ("rate_based_sqft", {"areas": [{"items": [{"categoryName": "Walls", "quantity": 523}]}]}),
        ("production_based", {"areas": [{"items": [{"categoryName": "Ceiling", "quantity": 311}]}]}),
        ("flat_rate_unit", {"flatRateItems": {"interior": {"doors": 3, "largeRooms": 1}}}),
    ],
)
@pytest.mark.parametrize("include_materials", [True, False])
def test_labor_plus_material_is_total(model, data, include_materials):
    out = calculate_pricing(model, {"includeMaterials": include_materials}, data)
    assert out.labor_cost + out.material_cost == out.total
    if not include_materials:
        assert out.material_cost == Decimal("0")


def test_walls_only_example():
    area = {"items": [{"categoryName": "Walls", "quantity": 500, "measurementUnit": "sqft", "selected": True}]}
    assert calculate_pricing("rate_based_sqft", {}, {"areas": [area]}).labor_cost == Decimal("275")
