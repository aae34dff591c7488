import copy

import pytest

from cadence.migration import (
    calculate_total_sqft_from_areas,
    convert_areas_to_flat_rate_items,
    convert_flat_rate_items_to_areas,
    migrate_quote_data,
    migration_registry,
)
from cadence.pricing.schemes import MeasurementShape


def test_areas_to_turnkey_backfills_home_sqft(living_room):
    living_room["items"][1]["quantity"] = 200.4
    data = {"areas": [living_room], "subtotal": 900, "total": 990, "breakdown": [{"x": 1}]}
    before = copy.deepcopy(data)

    result = migrate_quote_data(data, "rate_based_sqft", "turnkey")

    assert data == before
    assert result.data["homeSqft"] == 600
    assert result.data["areas"] == []
    assert result.data["propertyCondition"] == "average"
    assert result.data["subtotal"] == 0
    assert result.data["total"] == 0
    assert result.data["breakdown"] is None
    assert result.migration_log == [
        "Set home sqft to 600 based on area calculations",
        "Cleared areas data for turnkey pricing",
        "Set default property condition to average",
    ]


def test_existing_home_sqft_kept(living_room):
    result = migrate_quote_data({"areas": [living_room], "homeSqft": 1800}, "rate_based_sqft", "turnkey")
    assert result.data["homeSqft"] == 1800


@pytest.mark.parametrize("home_sqft", [-5, "0", 0, "abc", None])
def test_unusable_home_sqft_is_backfilled(living_room, home_sqft):
    result = migrate_quote_data({"homeSqft": home_sqft, "areas": [living_room]}, "rate_based_sqft", "turnkey")
    assert result.data["homeSqft"] == 600
    assert result.migration_log[0] == "Set home sqft to 600 based on area calculations"


def test_turnkey_to_areas_clears_areas():
    result = migrate_quote_data({"homeSqft": 2000}, "turnkey", "rate_based_sqft")
    assert result.data["areas"] == []
    assert result.migration_log == ["Cleared areas - will need to be redefined for area-based pricing"]


def test_between_area_models_injects_painters(living_room):
    result = migrate_quote_data({"areas": [living_room]}, "rate_based_sqft", "production_based")
    assert result.data["areas"] == [living_room]
    assert result.data["paintersOnSite"] == 2
    assert result.migration_log == [
        "Preserved areas data - compatible schemes",
        "Set default painters on site to 2",
    ]


def test_flat_rate_to_areas():
    data = {"flatRateItems": {"interior": {"mediumRooms": 2, "doors": 3}, "exterior": {"windows": 4}}}
    result = migrate_quote_data(data, "flat_rate_unit", "rate_based_sqft")

    assert result.data["flatRateItems"] == {}
    assert result.data["areas"] == [
        {
            "id": "interior-converted",
            "name": "Interior (Converted)",
            "items": [
                {"categoryName": "Medium Room Walls", "quantity": 900, "measurementUnit": "sqft", "selected": True},
                {"categoryName": "Interior Doors", "quantity": 3, "measurementUnit": "unit", "selected": True},
            ],
        },
        {
            "id": "exterior-converted",
            "name": "Exterior (Converted)",
            "items": [{"categoryName": "Windows", "quantity": 4, "measurementUnit": "unit", "selected": True}],
        },
    ]
    assert result.migration_log == ["Converted flat rate items to areas - review and adjust quantities"]


def test_areas_to_flat_rate(living_room):
    result = migrate_quote_data({"areas": [living_room]}, "rate_based_sqft", "unit_pricing")
    assert result.data["areas"] == []
    # walls/ceiling/trim have no flat-rate counterpart
    assert result.data["flatRateItems"] == {"interior": {"doors": 2}, "exterior": {}}


def test_same_model_only_resets_pricing():
    result = migrate_quote_data({"homeSqft": 1500, "total": 5250}, "turnkey", "sqft_turnkey")
    assert result.data["homeSqft"] == 1500
    assert result.data["total"] == 0
    assert result.migration_log == ["No specific migration needed"]


def test_pair_without_handler():
    result = migrate_quote_data({"homeSqft": 1500, "propertyCondition": "good"}, "turnkey", "flat_rate_unit")
    assert result.migration_log == ["No specific migration needed"]


def test_result_dict_shape():
    out = migrate_quote_data({}, "turnkey", "turnkey").to_dict()
    assert set(out) == {"data", "migrationLog"}


def test_duplicate_handler_rejected():
    with pytest.raises(ValueError):
        migration_registry.register(MeasurementShape.AREAS, MeasurementShape.AREAS, lambda data, log: None)


# --- converters ---


def test_total_sqft_counts_only_sqft_items(living_room):
    assert calculate_total_sqft_from_areas([living_room]) == 600
    assert calculate_total_sqft_from_areas(None) == 0


def test_flat_to_areas_skips_unknown_and_zero():
    areas = convert_flat_rate_items_to_areas({"interior": {"closets": 2, "hotTub": 1, "doors": 0}})
    assert areas == [
        {
            "id": "interior-converted",
            "name": "Interior (Converted)",
            "items": [{"categoryName": "Closet Walls", "quantity": 200, "measurementUnit": "sqft", "selected": True}],
        }
    ]
    assert convert_flat_rate_items_to_areas({}) == []


def test_areas_to_flat_mapping():
    area = {
        "name": "Outside",
        "items": [
            {"categoryName": "Exterior Doors", "quantity": 2, "measurementUnit": "unit"},
            {"categoryName": "Garage", "quantity": 1, "measurementUnit": "unit"},
            {"categoryName": "Shutters", "quantity": 8, "measurementUnit": "unit"},
            {"categoryName": "Closet Walls", "quantity": 250, "measurementUnit": "sqft"},
            {"categoryName": "Accent Walls", "quantity": 120, "measurementUnit": "sqft"},
            {"categoryName": "Kitchen Cabinets", "quantity": 12.7, "measurementUnit": "unit"},
        ],
    }
    assert convert_areas_to_flat_rate_items([area]) == {
        "interior": {"closets": 3, "accentWalls": 1, "cabinets": 12},
        "exterior": {"doors": 2, "garageDoors": 1, "shutters": 8},
    }


def test_garage_doors_count_as_interior_doors():
    area = {"items": [{"categoryName": "Garage Doors", "quantity": 1, "measurementUnit": "unit"}]}
    assert convert_areas_to_flat_rate_items([area]) == {"interior": {"doors": 1}, "exterior": {}}


def test_garage_doors_round_trip_is_lossy():
    areas = convert_flat_rate_items_to_areas({"exterior": {"garageDoors": 2}})
    assert convert_areas_to_flat_rate_items(areas) == {"interior": {"doors": 2}, "exterior": {}}


def test_round_trip_is_lossy_for_rooms():
    original = {"interior": {"mediumRooms": 2, "closets": 1}}
    back = convert_areas_to_flat_rate_items(convert_flat_rate_items_to_areas(original))
    assert back == {"interior": {"closets": 1}, "exterior": {}}


def test_converters_skip_malformed_entries():
    areas = ["Kitchen", {"items": [None, {"categoryName": "Walls", "quantity": 120, "measurementUnit": "sqft"}]}]
    assert calculate_total_sqft_from_areas(areas) == 120
    assert convert_areas_to_flat_rate_items([{"items": [7, {"categoryName": "Window", "quantity": 2}]}]) == {
        "interior": {},
        "exterior": {"windows": 2},
    }
