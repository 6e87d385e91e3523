"""Abstract interface for category / type / model metadata."""

from abc import ABC, abstractmethod

from src.core.entities.catalog import AssetType, ModelInfo


class ICatalogProvider(ABC):
    """Read-only access to the asset category tree."""

    @abstractmethod
    async def find_model(self, item_name: str, brand: str) -> ModelInfo | None:
        """Find the model registered for (item_name, brand), or None."""
        pass

    @abstractmethod
    async def get_type(self, category: str, type_name: str) -> AssetType | None:
        """Get an asset type by category and type name."""
        pass
