"""Tests for InMemoryKeyValueStore."""

from src.infrastructure.storage.memory import InMemoryKeyValueStore


class TestInMemoryKeyValueStore:
    async def test_unknown_key_is_empty(self):
        assert await InMemoryKeyValueStore().load("units") == []

    async def test_initial_collections(self):
        store = InMemoryKeyValueStore({"units": [{"id": "a"}]})
        assert await store.load("units") == [{"id": "a"}]

    async def test_save_replaces(self):
        store = InMemoryKeyValueStore({"units": [{"id": "a"}]})
        await store.save("units", [{"id": "b"}])
        assert await store.load("units") == [{"id": "b"}]
        assert store.save_count == 1

    async def test_no_aliasing(self):
        items = [{"id": "a", "tags": ["x"]}]
        store = InMemoryKeyValueStore()
        await store.save("units", items)

        items[0]["tags"].append("y")
        loaded = await store.load("units")
        loaded[0]["id"] = "changed"

        assert await store.load("units") == [{"id": "a", "tags": ["x"]}]
