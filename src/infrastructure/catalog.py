"""Category / type / model metadata backed by the key-value store."""

from src.config import InventorySettings, get_logger, get_settings
from src.core.entities.catalog import AssetCategory, AssetType, ModelInfo
from src.core.entities.inventory import identity_key
from src.core.interfaces.catalog_provider import ICatalogProvider
from src.core.interfaces.key_value_store import ASSET_CATEGORIES, IKeyValueStore
from src.core.services.persistence import save_collection

logger = get_logger(__name__)


class KeyValueCatalogProvider(ICatalogProvider):
    """Reads the ``asset_categories`` collection on every lookup."""

    def __init__(
        self,
        store: IKeyValueStore,
        settings: InventorySettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings().inventory

    async def list_categories(self) -> list[AssetCategory]:
        rows = await self._store.load(ASSET_CATEGORIES)
        return [AssetCategory.model_validate(row) for row in rows]

    async def save_categories(self, categories: list[AssetCategory]) -> None:
        await save_collection(
            self._store,
            ASSET_CATEGORIES,
            [c.model_dump(mode="json") for c in categories],
            timeout=self._settings.persist_timeout,
        )
        logger.info("asset_categories_saved", count=len(categories))

    async def find_model(self, item_name: str, brand: str) -> ModelInfo | None:
        normalize = self._settings.normalize_identity
        wanted = identity_key(item_name, brand, normalize)
        for category in await self.list_categories():
            for asset_type in category.types:
                for item in asset_type.standard_items:
                    if identity_key(item.name, item.brand, normalize) == wanted:
                        return ModelInfo(item=item, asset_type=asset_type, category=category)
        return None

    async def get_type(self, category: str, type_name: str) -> AssetType | None:
        for cat in await self.list_categories():
            if cat.name != category:
                continue
            for asset_type in cat.types:
                if asset_type.name == type_name:
                    return asset_type
        return None
