"""
Measurement vs count classification.

Catalog metadata (``bulk_type``) decides. The shape of the ledger data
(any unit carrying ``initial_balance``) is the fallback when the model is
unknown, and a cross-check when it is known.
"""

from src.config import get_logger
from src.core.entities.allocation import Classification, ClassificationSource, ItemKind
from src.core.entities.inventory import InventoryUnit
from src.core.interfaces.catalog_provider import ICatalogProvider

logger = get_logger(__name__)


def kind_from_units(units: list[InventoryUnit]) -> ItemKind:
    """Ledger heuristic: measurement if any unit has an initial balance."""
    if any(u.is_measurement for u in units):
        return ItemKind.MEASUREMENT
    return ItemKind.COUNT


class ItemClassifier:
    def __init__(self, catalog: ICatalogProvider | None = None) -> None:
        self._catalog = catalog

    async def classify(
        self,
        item_name: str,
        brand: str,
        units: list[InventoryUnit],
    ) -> Classification:
        """
        Classify a model.

        Args:
            item_name: Model name as requested.
            brand: Model brand as requested.
            units: Ledger units of this model, any status.
        """
        model = None
        if self._catalog is not None:
            model = await self._catalog.find_model(item_name, brand)

        if model is None:
            return Classification(
                kind=kind_from_units(units),
                source=ClassificationSource.LEDGER,
            )

        kind = ItemKind.MEASUREMENT if model.is_measurement else ItemKind.COUNT
        if units and kind_from_units(units) != kind:
            logger.warning(
                "classification_mismatch",
                item_name=item_name,
                brand=brand,
                metadata=kind.value,
                ledger=kind_from_units(units).value,
            )

        return Classification(
            kind=kind,
            source=ClassificationSource.METADATA,
            unit=model.unit,
        )
