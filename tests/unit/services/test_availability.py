"""Tests for AvailabilityResolver."""

from datetime import UTC, datetime

from src.config import InventorySettings
from src.core.entities.inventory import AssetStatus, InventoryUnit
from src.core.services.availability import AvailabilityResolver
from src.core.services.inventory_ledger import InventoryLedger
from src.infrastructure.storage.memory import InMemoryKeyValueStore


def _make_unit(unit_id: str, month: int = 1, **overrides) -> InventoryUnit:
    data = {
        "id": unit_id,
        "item_name": "Unifi AP AC Lite",
        "brand": "Ubiquiti",
        "registration_date": datetime(2024, month, 1, tzinfo=UTC),
    }
    data.update(overrides)
    return InventoryUnit(**data)


def _make_drum(unit_id: str, balance: float, month: int = 1, **overrides) -> InventoryUnit:
    return _make_unit(
        unit_id,
        month=month,
        item_name="Drop Cable",
        brand="Fiberhome",
        initial_balance=1000,
        current_balance=balance,
        **overrides,
    )


def _make_resolver() -> AvailabilityResolver:
    return AvailabilityResolver(InventoryLedger(InMemoryKeyValueStore(), InventorySettings()))


class TestCountAvailability:
    def test_counts_in_storage_units(self):
        units = [
            _make_unit("a"),
            _make_unit("b"),
            _make_unit("c", status=AssetStatus.IN_USE),
        ]
        result = _make_resolver().check(units, "Unifi AP AC Lite", "Ubiquiti", 2)
        assert result.available == 2
        assert result.is_sufficient is True
        assert result.recommended_source_ids == ["a", "b"]
        assert result.is_measurement is False

    def test_insufficient(self):
        result = _make_resolver().check([_make_unit("a")], "Unifi AP AC Lite", "Ubiquiti", 3)
        assert result.available == 1
        assert result.is_sufficient is False
        assert result.recommended_source_ids == ["a"]

    def test_ledger_order_by_default(self):
        units = [_make_unit("new", month=5), _make_unit("old", month=1)]
        result = _make_resolver().check(units, "Unifi AP AC Lite", "Ubiquiti", 1)
        assert result.recommended_source_ids == ["new"]

    def test_fifo_order_on_request(self):
        units = [_make_unit("new", month=5), _make_unit("old", month=1)]
        result = _make_resolver().check(units, "Unifi AP AC Lite", "Ubiquiti", 1, fifo=True)
        assert result.recommended_source_ids == ["old"]

    def test_fractional_need_rounds_up_recommendations(self):
        units = [_make_unit("a"), _make_unit("b"), _make_unit("c")]
        result = _make_resolver().check(units, "Unifi AP AC Lite", "Ubiquiti", 1.5)
        assert result.recommended_source_ids == ["a", "b"]


class TestMeasurementAvailability:
    def test_sums_balances(self):
        units = [_make_drum("a", 300), _make_drum("b", 200)]
        result = _make_resolver().check(units, "Drop Cable", "Fiberhome", 450)
        assert result.available == 500
        assert result.is_sufficient is True
        assert result.is_measurement is True
        assert result.physical == 2
        assert result.recommended_source_ids == ["a", "b"]

    def test_fragmented_when_no_single_unit_covers(self):
        units = [_make_drum("a", 300), _make_drum("b", 200)]
        assert _make_resolver().check(units, "Drop Cable", "Fiberhome", 450).is_fragmented is True
        assert _make_resolver().check(units, "Drop Cable", "Fiberhome", 250).is_fragmented is False

    def test_insufficient(self):
        result = _make_resolver().check([_make_drum("a", 30)], "Drop Cable", "Fiberhome", 50)
        assert result.is_sufficient is False
        assert result.is_fragmented is False

    def test_consumed_drum_keeps_measurement_classification(self):
        units = [_make_drum("a", 0, status=AssetStatus.CONSUMED)]
        result = _make_resolver().check(units, "Drop Cable", "Fiberhome", 10)
        assert result.available == 0
        assert result.is_measurement is True
        assert result.is_sufficient is False


class TestNoStock:
    def test_unknown_model(self):
        result = _make_resolver().check([], "Nothing", "Nobody", 1)
        assert result.available == 0
        assert result.is_sufficient is False
        assert result.recommended_source_ids == []

    def test_zero_need_is_sufficient(self):
        assert _make_resolver().check([], "Nothing", "Nobody", 0).is_sufficient is True

    def test_identity_is_normalized(self):
        result = _make_resolver().check([_make_unit("a")], "unifi ap ac lite ", "UBIQUITI", 1)
        assert result.available == 1
