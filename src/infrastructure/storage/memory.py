"""In-process key-value store, for tests and the ``memory`` backend."""

import copy
from typing import Any

from src.core.interfaces.key_value_store import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict of collections. Loads and saves copy, so callers never alias state."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None):
        self._collections: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})
        self.save_count = 0

    async def load(self, collection_key: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._collections.get(collection_key, []))

    async def save(
        self, collection_key: str, items: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        self._collections[collection_key] = copy.deepcopy(items)
        self.save_count += 1
        return copy.deepcopy(items)
