"""Tests for the application service factory."""

from src.application.services import create_store, get_inventory_service, reset_services
from src.config import reset_settings
from src.core.services import InventoryService
from src.infrastructure.storage import InMemoryKeyValueStore, SQLiteKeyValueStore


class TestCreateStore:
    def test_memory_backend(self):
        assert isinstance(create_store(), InMemoryKeyValueStore)

    def test_sqlite_backend(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
        monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
        reset_settings()
        assert isinstance(create_store(), SQLiteKeyValueStore)


class TestGetInventoryService:
    def test_singleton(self):
        first = get_inventory_service()
        assert isinstance(first, InventoryService)
        assert get_inventory_service() is first

    def test_explicit_store_is_not_cached(self):
        cached = get_inventory_service()
        other = get_inventory_service(store=InMemoryKeyValueStore())
        assert other is not cached
        assert get_inventory_service() is cached

    def test_reset(self):
        first = get_inventory_service()
        reset_services()
        assert get_inventory_service() is not first
