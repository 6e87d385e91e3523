"""Tests for SQLiteKeyValueStore."""

import asyncio
from unittest.mock import patch

import aiosqlite
import pytest

from src.config import InventorySettings
from src.core.entities.inventory import InventoryUnit, MovementType, StockMovementDraft
from src.core.exceptions import DatabaseError, PersistenceTimeoutError
from src.core.interfaces.key_value_store import INVENTORY_UNITS
from src.core.services import InventoryService
from src.core.services.persistence import save_collection
from src.infrastructure.storage.sqlite import SQLiteKeyValueStore


@pytest.fixture
def store(global_pool) -> SQLiteKeyValueStore:
    return SQLiteKeyValueStore()


class TestSQLiteKeyValueStore:
    async def test_unknown_key_loads_empty(self, store):
        assert await store.load("nothing") == []

    async def test_save_and_load_keep_order(self, store):
        items = [{"id": "b", "n": 2}, {"id": "a", "n": 1}]
        assert await store.save("units", items) == items
        assert await store.load("units") == items

    async def test_save_replaces_whole_collection(self, store):
        await store.save("units", [{"id": "a"}, {"id": "b"}])
        await store.save("units", [{"id": "c"}])
        assert await store.load("units") == [{"id": "c"}]

    async def test_collections_are_independent(self, store):
        await store.save("units", [{"id": "a"}])
        await store.save("movements", [{"id": "m"}])
        assert await store.load("units") == [{"id": "a"}]
        assert await store.load("movements") == [{"id": "m"}]

    async def test_item_count_tracked(self, store):
        from src.infrastructure.storage.sqlite import get_connection

        await store.save("units", [{"id": "a"}, {"id": "b"}])
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT item_count FROM collections WHERE key = 'units'")
            assert (await cursor.fetchone())[0] == 2

    async def test_sqlite_errors_wrapped(self, store):
        import aiosqlite

        import src.infrastructure.storage.sqlite.kv_store as kv_module

        def failing_transaction():
            raise aiosqlite.OperationalError("database is locked")

        with patch.object(kv_module, "get_transaction", failing_transaction):
            with pytest.raises(DatabaseError) as exc_info:
                await store.save("units", [])

        assert "database is locked" in exc_info.value.message

    async def test_cancelled_save_keeps_previous_collection(self, store):
        await store.save("units", [{"id": "old"}])

        task = asyncio.create_task(store.save("units", [{"id": "new"}]))
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert await store.load("units") == [{"id": "old"}]

    async def test_lock_wait_timeout_keeps_store_usable(self, store, initialized_db):
        await store.save(INVENTORY_UNITS, [{"id": "a"}])
        blocker = await aiosqlite.connect(initialized_db, isolation_level=None)
        await blocker.execute("BEGIN IMMEDIATE")

        async def release_later() -> None:
            await asyncio.sleep(0.2)
            await blocker.rollback()

        releaser = asyncio.create_task(release_later())
        try:
            with pytest.raises(PersistenceTimeoutError):
                await save_collection(store, INVENTORY_UNITS, [{"id": "b"}], timeout=0.05)
            await releaser
        finally:
            await blocker.close()

        assert await store.load(INVENTORY_UNITS) == [{"id": "a"}]
        for n in range(4):
            await save_collection(store, INVENTORY_UNITS, [{"id": f"c{n}"}], timeout=5)
        assert await store.load(INVENTORY_UNITS) == [{"id": "c3"}]


class TestInventoryServiceOnSQLite:
    async def test_register_and_consume_persist(self, store):
        service = InventoryService(store, settings=InventorySettings())
        await service.register_asset(
            InventoryUnit(id="d1", item_name="Drop Cable", brand="Fiberhome", initial_balance=500)
        )
        await service.record_movement(
            StockMovementDraft(asset_name="Drop Cable", brand="Fiberhome", type=MovementType.OUT_HANDOVER, quantity=100)
        )

        reloaded = InventoryService(SQLiteKeyValueStore(), settings=InventorySettings())
        unit = await reloaded.get_unit("d1")
        assert unit.current_balance == 500
        history = await reloaded.get_stock_history("Drop Cable", "Fiberhome")
        assert [m.balance_after for m in history] == [400, 500]
