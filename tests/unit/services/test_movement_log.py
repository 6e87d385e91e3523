"""Tests for the stock movement log."""

import random
from datetime import UTC, datetime, timedelta

import pytest

from src.config import InventorySettings
from src.core.entities.inventory import MovementType, StockMovement, StockMovementDraft
from src.core.services.movement_log import StockMovementLog, new_movement_id, recompute_group
from src.infrastructure.storage.memory import InMemoryKeyValueStore

BASE = datetime(2024, 5, 1, tzinfo=UTC)


def _make_movement(
    movement_id: str,
    movement_type: MovementType,
    quantity: float,
    days: int = 0,
    asset_name: str = "Drop Cable",
    brand: str = "Fiberhome",
) -> StockMovement:
    return StockMovement(
        id=movement_id,
        asset_name=asset_name,
        brand=brand,
        date=BASE + timedelta(days=days),
        type=movement_type,
        quantity=quantity,
    )


def _make_draft(movement_type: MovementType, quantity: float, days: int = 0, **kw) -> StockMovementDraft:
    return StockMovementDraft(
        asset_name=kw.get("asset_name", "Drop Cable"),
        brand=kw.get("brand", "Fiberhome"),
        date=BASE + timedelta(days=days),
        type=movement_type,
        quantity=quantity,
    )


@pytest.fixture
def movement_log() -> StockMovementLog:
    return StockMovementLog(InMemoryKeyValueStore(), InventorySettings())


class TestMovementId:
    def test_ids_are_unique_and_ordered(self):
        ids = [new_movement_id() for _ in range(50)]
        assert len(set(ids)) == 50
        assert all(i.startswith("MOV-") for i in ids)
        stamps = [i.split("-")[1] for i in ids]
        assert stamps == sorted(stamps)


class TestRecomputeGroup:
    def test_running_balance(self):
        result = recompute_group(
            [
                _make_movement("m1", MovementType.IN_PURCHASE, 100, days=0),
                _make_movement("m2", MovementType.OUT_INSTALLATION, 30, days=1),
                _make_movement("m3", MovementType.IN_RETURN, 5, days=2),
            ]
        )
        assert [m.balance_after for m in result] == [100, 70, 75]

    def test_outbound_floored_at_zero(self):
        result = recompute_group(
            [
                _make_movement("m1", MovementType.IN_PURCHASE, 10, days=0),
                _make_movement("m2", MovementType.OUT_BROKEN, 50, days=1),
                _make_movement("m3", MovementType.IN_ADJUSTMENT, 3, days=2),
            ]
        )
        assert [m.balance_after for m in result] == [10, 0, 3]

    def test_result_independent_of_input_order(self):
        movements = [
            _make_movement(f"m{i}", t, q, days=i)
            for i, (t, q) in enumerate(
                [
                    (MovementType.IN_PURCHASE, 100),
                    (MovementType.OUT_INSTALLATION, 20),
                    (MovementType.OUT_HANDOVER, 90),
                    (MovementType.IN_RETURN, 15),
                    (MovementType.OUT_ADJUSTMENT, 4),
                ]
            )
        ]
        expected = [(m.id, m.balance_after) for m in recompute_group(movements)]
        shuffled = movements[:]
        random.Random(7).shuffle(shuffled)
        assert [(m.id, m.balance_after) for m in recompute_group(shuffled)] == expected

    def test_same_date_ties_break_on_id(self):
        result = recompute_group(
            [
                _make_movement("m2", MovementType.OUT_INSTALLATION, 5),
                _make_movement("m1", MovementType.IN_PURCHASE, 10),
            ]
        )
        assert [m.id for m in result] == ["m1", "m2"]
        assert result[-1].balance_after == 5

    def test_does_not_mutate_input(self):
        movement = _make_movement("m1", MovementType.IN_PURCHASE, 10)
        recompute_group([movement])
        assert movement.balance_after == 0


class TestStockMovementLog:
    def test_build_uses_magnitude(self):
        movement = StockMovementLog.build(_make_draft(MovementType.OUT_ADJUSTMENT, -7))
        assert movement.quantity == 7
        assert movement.id.startswith("MOV-")

    async def test_record_returns_full_log(self, movement_log: StockMovementLog):
        await movement_log.record(_make_draft(MovementType.IN_PURCHASE, 100))
        log = await movement_log.record(_make_draft(MovementType.OUT_INSTALLATION, 40, days=1))
        assert len(log) == 2
        assert await movement_log.current_balance("Drop Cable", "Fiberhome") == 60

    async def test_backdated_entry_rebalances_later_entries(self, movement_log: StockMovementLog):
        await movement_log.record(_make_draft(MovementType.IN_PURCHASE, 100, days=0))
        await movement_log.record(_make_draft(MovementType.OUT_INSTALLATION, 30, days=5))
        await movement_log.record(_make_draft(MovementType.IN_ADJUSTMENT, 10, days=2))

        history = await movement_log.history("Drop Cable", "Fiberhome")
        assert [m.balance_after for m in history] == [80, 110, 100]

    async def test_other_groups_untouched(self, movement_log: StockMovementLog):
        await movement_log.record(_make_draft(MovementType.IN_PURCHASE, 5, asset_name="Router", brand="TP-Link"))
        await movement_log.record(_make_draft(MovementType.IN_PURCHASE, 100))

        router = await movement_log.history("Router", "TP-Link")
        assert len(router) == 1
        assert router[0].balance_after == 5

    async def test_groups_are_normalized(self, movement_log: StockMovementLog):
        await movement_log.record(_make_draft(MovementType.IN_PURCHASE, 100))
        await movement_log.record(
            _make_draft(MovementType.OUT_INSTALLATION, 25, days=1, asset_name="drop cable ", brand="FIBERHOME")
        )
        assert await movement_log.current_balance("Drop Cable", "Fiberhome") == 75

    async def test_record_many_single_save(self):
        store = InMemoryKeyValueStore()
        movement_log = StockMovementLog(store, InventorySettings())
        await movement_log.record_many(
            [
                _make_draft(MovementType.IN_PURCHASE, 10),
                _make_draft(MovementType.OUT_INSTALLATION, 4, days=1),
            ]
        )
        assert store.save_count == 1
        assert await movement_log.current_balance("Drop Cable", "Fiberhome") == 6

    async def test_append_nothing_does_not_save(self):
        store = InMemoryKeyValueStore()
        movement_log = StockMovementLog(store, InventorySettings())
        assert await movement_log.append([]) == []
        assert store.save_count == 0

    async def test_history_of_unknown_model_is_empty(self, movement_log: StockMovementLog):
        assert await movement_log.history("Nope", "None") == []
        assert await movement_log.current_balance("Nope", "None") == 0
