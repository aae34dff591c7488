import pytest

from cadence.core.errors import NoRollbackAvailableError
from cadence.migration import (
    RollbackSnapshot,
    create_rollback_data,
    migrate_quote_data,
    rollback_quote_data,
)


def test_snapshot_is_a_deep_copy(living_room, fixed_now):
    data = {"areas": [living_room], "total": 750}
    snap = create_rollback_data(data, "rate_based_sqft", now=fixed_now)

    data["areas"][0]["items"].clear()
    data["total"] = 0

    assert snap.timestamp == "2025-01-01T12:00:00+00:00"
    assert snap.rollback_available is True
    assert snap.original_data["total"] == 750
    assert len(snap.original_data["areas"][0]["items"]) == 4


def test_migrate_then_rollback_restores_everything(living_room, fixed_now):
    original = {"areas": [living_room], "paintersOnSite": 3, "total": 900}
    snap = create_rollback_data(original, "production_based", now=fixed_now)

    migrated = migrate_quote_data(original, "production_based", "turnkey")
    assert migrated.data["areas"] == []

    restored = rollback_quote_data(snap, now=fixed_now)
    assert restored.data == original
    assert restored.scheme == "production_based"
    assert restored.restored_at == "2025-01-01T12:00:00+00:00"


def test_restored_data_is_independent(fixed_now):
    snap = create_rollback_data({"homeSqft": 1200}, "turnkey", now=fixed_now)
    restored = rollback_quote_data(snap)
    restored.data["homeSqft"] = 1
    assert snap.original_data == {"homeSqft": 1200}


def test_restore_hands_back_a_spent_snapshot(fixed_now):
    snap = create_rollback_data({"homeSqft": 1200}, "turnkey", now=fixed_now)
    restored = rollback_quote_data(snap)

    assert restored.snapshot.rollback_available is False
    assert restored.snapshot.original_data == snap.original_data
    with pytest.raises(NoRollbackAvailableError):
        rollback_quote_data(restored.snapshot)
    with pytest.raises(NoRollbackAvailableError):
        rollback_quote_data(restored.snapshot.to_dict())


def test_no_snapshot():
    with pytest.raises(NoRollbackAvailableError):
        rollback_quote_data(None)


def test_consumed_snapshot(fixed_now):
    snap = create_rollback_data({"homeSqft": 1200}, "turnkey", now=fixed_now).consumed()
    with pytest.raises(NoRollbackAvailableError):
        rollback_quote_data(snap)


def test_stored_dict_round_trip(fixed_now):
    snap = create_rollback_data({"flatRateItems": {"interior": {"doors": 2}}}, "flat_rate_unit", now=fixed_now)
    stored = snap.to_dict()
    assert stored["originalScheme"] == "flat_rate_unit"
    assert stored["rollbackAvailable"] is True

    restored = rollback_quote_data(stored)
    assert restored.data == {"flatRateItems": {"interior": {"doors": 2}}}
    assert RollbackSnapshot.from_dict(stored) == snap


def test_stored_dict_unavailable():
    with pytest.raises(NoRollbackAvailableError):
        rollback_quote_data({"originalScheme": "turnkey", "originalData": {}, "rollbackAvailable": False})
    with pytest.raises(NoRollbackAvailableError):
        rollback_quote_data({"originalScheme": "turnkey", "rollbackAvailable": True})


def test_there_and_back_then_rollback(living_room, fixed_now):
    original = {"areas": [living_room], "jobScope": "interior", "total": 750}
    snap = create_rollback_data(original, "rate_based_sqft", now=fixed_now)

    there = migrate_quote_data(original, "rate_based_sqft", "flat_rate_unit")
    back = migrate_quote_data(there.data, "flat_rate_unit", "rate_based_sqft")
    assert back.data != original

    restored = rollback_quote_data(snap)
    assert restored.data == original
    assert restored.scheme == "rate_based_sqft"
