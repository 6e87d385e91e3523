"""
Stock level analysis.

Aggregates IN_STORAGE units per model, flags critical (nothing left) and
low (at or under threshold) models, and suggests restock quantities.
Models are grouped, and thresholds looked up, by the same identity key
the ledger uses.
"""

from dataclasses import dataclass, field

from src.config import InventorySettings, get_logger, get_settings
from src.core.entities.inventory import AssetStatus, InventoryUnit, identity_key
from src.core.interfaces.key_value_store import STOCK_THRESHOLDS, IKeyValueStore
from src.core.services.persistence import save_collection

logger = get_logger(__name__)

KEY_SEPARATOR = "|"


def threshold_key(item_name: str, brand: str, normalize: bool = True) -> str:
    """``"<item_name>|<brand>"`` under the identity normalization policy."""
    return KEY_SEPARATOR.join(identity_key(item_name, brand, normalize))


def normalize_threshold_key(key: str, normalize: bool = True) -> str:
    """Re-key a caller supplied ``"<item_name>|<brand>"`` string."""
    item_name, sep, brand = key.rpartition(KEY_SEPARATOR)
    if not sep:
        return threshold_key(key, "", normalize)
    return threshold_key(item_name, brand, normalize)


@dataclass
class StockLevel:
    item_name: str
    brand: str
    category: str | None
    count: int  # units in storage
    quantity: float  # measured balance for measurement models, else count
    threshold: int = 0


@dataclass
class StockAlerts:
    critical: list[StockLevel] = field(default_factory=list)
    low: list[StockLevel] = field(default_factory=list)

    @property
    def total_critical(self) -> int:
        return len(self.critical)

    @property
    def total_low(self) -> int:
        return len(self.low)


@dataclass
class RestockSuggestion:
    item_name: str
    brand: str
    available: int
    target: int
    quantity: int
    note: str


class StockAnalyzer:
    def __init__(
        self,
        store: IKeyValueStore,
        settings: InventorySettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings().inventory

    def key(self, item_name: str, brand: str) -> str:
        return threshold_key(item_name, brand, self._settings.normalize_identity)

    def _normalize(self, thresholds: dict[str, int]) -> dict[str, int]:
        return {
            normalize_threshold_key(k, self._settings.normalize_identity): int(v)
            for k, v in thresholds.items()
        }

    async def get_thresholds(self) -> dict[str, int]:
        rows = await self._store.load(STOCK_THRESHOLDS)
        return self._normalize({row["key"]: row["threshold"] for row in rows})

    async def set_thresholds(self, thresholds: dict[str, int]) -> dict[str, int]:
        """Replace all thresholds. Keys differing only in spelling collapse, last wins."""
        normalized = self._normalize(thresholds)
        await save_collection(
            self._store,
            STOCK_THRESHOLDS,
            [{"key": k, "threshold": v} for k, v in normalized.items()],
            timeout=self._settings.persist_timeout,
        )
        logger.info("stock_thresholds_updated", count=len(normalized))
        return normalized

    def levels(self, units: list[InventoryUnit]) -> list[StockLevel]:
        """
        One level per model seen in the ledger, zero-stock models included.

        The first spelling met in ledger order is the one displayed.
        """
        levels: dict[str, StockLevel] = {}
        for unit in units:
            level = levels.setdefault(
                self.key(unit.item_name, unit.brand),
                StockLevel(
                    item_name=unit.item_name,
                    brand=unit.brand,
                    category=unit.category,
                    count=0,
                    quantity=0.0,
                ),
            )
            if unit.status != AssetStatus.IN_STORAGE:
                continue
            level.count += 1
            level.quantity += unit.available_balance if unit.is_measurement else 1
        return list(levels.values())

    async def analyze(self, units: list[InventoryUnit]) -> StockAlerts:
        thresholds = await self.get_thresholds()
        alerts = StockAlerts()
        for level in self.levels(units):
            level.threshold = thresholds.get(
                self.key(level.item_name, level.brand),
                self._settings.low_stock_default,
            )
            if level.count == 0:
                alerts.critical.append(level)
            elif level.count <= level.threshold:
                alerts.low.append(level)
        return alerts

    def suggest_restock(
        self,
        item_name: str,
        brand: str,
        available: int,
        threshold: int | None = None,
    ) -> RestockSuggestion:
        """Quantity needed to bring a model back to its target, at least one."""
        target = threshold if threshold is not None else self._settings.restock_target
        needed = max(1, target - available)
        if available == 0:
            note = (
                f"Restock: out of stock. Procure {needed} unit(s)"
                f" to reach the stock target ({target})."
            )
        else:
            note = (
                f"Restock: running low ({available} left). Procure {needed} unit(s)"
                f" to reach the stock target ({target})."
            )
        return RestockSuggestion(
            item_name=item_name,
            brand=brand,
            available=available,
            target=target,
            quantity=needed,
            note=note,
        )
