"""Abstract interface for whole-collection persistence."""

from abc import ABC, abstractmethod
from typing import Any

# Collection keys
INVENTORY_UNITS = "inventory_units"
STOCK_MOVEMENTS = "stock_movements"
ASSET_CATEGORIES = "asset_categories"
STOCK_THRESHOLDS = "stock_thresholds"


class IKeyValueStore(ABC):
    """
    Key-value store holding whole collections.

    ``save`` replaces the stored collection wholesale (document-replace
    semantics). ``load`` returns items in the order they were saved.
    """

    @abstractmethod
    async def load(self, collection_key: str) -> list[dict[str, Any]]:
        """Load a collection; unknown keys yield an empty list."""
        pass

    @abstractmethod
    async def save(
        self, collection_key: str, items: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        """Replace a collection and return what was stored."""
        pass
