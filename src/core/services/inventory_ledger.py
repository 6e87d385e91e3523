"""
Inventory ledger.

Single source of truth for on-hand stock. The ledger reads and writes the
whole ``inventory_units`` collection; callers accumulate their changes as
per-unit patches and hand them over in one :meth:`InventoryLedger.commit`.
"""

from typing import Any

from src.config import InventorySettings, get_logger, get_settings
from src.core.entities.catalog import ModelInfo, TrackingMethod
from src.core.entities.inventory import (
    ActivityLogEntry,
    AssetStatus,
    InventoryUnit,
    identity_key,
)
from src.core.exceptions import (
    BalanceInvariantError,
    ClassificationChangeError,
    DuplicateUnitError,
    UnitNotFoundError,
)
from src.core.interfaces.key_value_store import INVENTORY_UNITS, IKeyValueStore
from src.core.services.persistence import save_collection

logger = get_logger(__name__)

# Fields a patch may never touch
_IMMUTABLE_FIELDS = {"id", "registration_date"}


class InventoryLedger:
    """Loads, validates and persists inventory units."""

    def __init__(
        self,
        store: IKeyValueStore,
        settings: InventorySettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings().inventory

    @property
    def settings(self) -> InventorySettings:
        return self._settings

    def key(self, item_name: str, brand: str) -> tuple[str, str]:
        """Identity key under the configured normalization policy."""
        return identity_key(item_name, brand, self._settings.normalize_identity)

    def unit_key(self, unit: InventoryUnit) -> tuple[str, str]:
        return self.key(unit.item_name, unit.brand)

    # --- Reads ---

    async def load(self) -> list[InventoryUnit]:
        """Load every unit in ledger (insertion) order."""
        rows = await self._store.load(INVENTORY_UNITS)
        return [InventoryUnit.model_validate(row) for row in rows]

    async def get(self, unit_id: str) -> InventoryUnit:
        for unit in await self.load():
            if unit.id == unit_id:
                return unit
        raise UnitNotFoundError(unit_id)

    def matching(
        self, units: list[InventoryUnit], item_name: str, brand: str
    ) -> list[InventoryUnit]:
        """All units of a model, any status, in ledger order."""
        key = self.key(item_name, brand)
        return [u for u in units if self.unit_key(u) == key]

    def eligible(
        self, units: list[InventoryUnit], item_name: str, brand: str
    ) -> list[InventoryUnit]:
        """IN_STORAGE units of a model, in ledger order."""
        return [
            u
            for u in self.matching(units, item_name, brand)
            if u.status == AssetStatus.IN_STORAGE
        ]

    def eligible_fifo(
        self, units: list[InventoryUnit], item_name: str, brand: str
    ) -> list[InventoryUnit]:
        """IN_STORAGE units of a model, oldest registration first."""
        return sorted(
            self.eligible(units, item_name, brand),
            key=lambda u: u.registration_date,
        )

    # --- Writes ---

    async def commit(self, units: list[InventoryUnit]) -> None:
        """Replace the stored collection in a single write."""
        await save_collection(
            self._store,
            INVENTORY_UNITS,
            [u.model_dump(mode="json") for u in units],
            timeout=self._settings.persist_timeout,
        )
        logger.debug("ledger_committed", units=len(units))

    def prepare_new(
        self,
        unit: InventoryUnit,
        existing: list[InventoryUnit],
        model: ModelInfo | None = None,
        tracking_method: TrackingMethod | None = None,
    ) -> InventoryUnit:
        """
        Validate a unit about to be registered.

        Bulk-tracked units lose serial number and MAC address. Measurement
        units start with a full balance.
        """
        if any(u.id == unit.id for u in existing):
            raise DuplicateUnitError(unit.id)

        update: dict[str, Any] = {}
        tracking = tracking_method or (model.tracking_method if model else None)
        if tracking == TrackingMethod.BULK:
            update["serial_number"] = None
            update["mac_address"] = None

        if unit.is_measurement and unit.current_balance is None:
            update["current_balance"] = unit.initial_balance

        prepared = unit.model_copy(update=update)
        self._check_balance(
            prepared.id, prepared.current_balance, prepared.initial_balance
        )
        return prepared

    def apply_patch(self, unit: InventoryUnit, patch: dict[str, Any]) -> InventoryUnit:
        """Merge a patch into a unit, enforcing the ledger invariants."""
        patch = {k: v for k, v in patch.items() if k not in _IMMUTABLE_FIELDS}

        if "initial_balance" in patch:
            was_measurement = unit.initial_balance is not None
            if (patch["initial_balance"] is not None) != was_measurement:
                raise ClassificationChangeError(unit.id)

        merged = {**unit.model_dump(), **patch}
        if merged.get("current_balance") is not None:
            merged["current_balance"] = self._check_balance(
                unit.id, merged["current_balance"], merged.get("initial_balance")
            )
        return InventoryUnit.model_validate(merged)

    def apply_patches(
        self,
        units: list[InventoryUnit],
        patches: dict[str, dict[str, Any]],
    ) -> list[InventoryUnit]:
        """Apply per-unit patches, keeping ledger order. Unknown ids are ignored."""
        return [
            self.apply_patch(u, patches[u.id]) if u.id in patches else u
            for u in units
        ]

    @staticmethod
    def with_log_entry(
        unit: InventoryUnit,
        patch: dict[str, Any],
        entry: ActivityLogEntry,
    ) -> dict[str, Any]:
        """Extend a patch so the unit's activity log gains ``entry``."""
        log = patch.get("activity_log", unit.activity_log)
        return {**patch, "activity_log": [*log, entry]}

    def _check_balance(
        self,
        unit_id: str,
        balance: float | None,
        initial_balance: float | None,
    ) -> float | None:
        """Clamp float noise to [0, initial]; refuse anything further out."""
        if balance is None:
            return None

        eps = self._settings.balance_epsilon
        upper = initial_balance if initial_balance is not None else max(balance, 0.0)
        if balance < -eps or balance > upper + eps:
            raise BalanceInvariantError(unit_id, balance, initial_balance)

        clamped = min(max(balance, 0.0), upper)
        return round(clamped, self._settings.balance_precision)
