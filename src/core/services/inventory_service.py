"""
Inventory service.

Owns the inventory ledger and the stock movement log and is the only
mutation path into either. Every mutation runs under one asyncio lock:
reads of the ledger snapshot and the write-back happen without another
mutation interleaving, so two allocations can never both spend the same
unit or balance.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from src.config import InventorySettings, get_logger, get_settings
from src.core.entities.allocation import (
    AllocationRequest,
    AvailabilityResult,
    ConsumptionContext,
    ConsumptionResult,
)
from src.core.entities.catalog import TrackingMethod
from src.core.entities.inventory import (
    ActivityLogEntry,
    AssetStatus,
    InventoryUnit,
    MovementType,
    StockMovement,
    StockMovementDraft,
)
from src.core.exceptions import UnitNotFoundError
from src.core.interfaces.catalog_provider import ICatalogProvider
from src.core.interfaces.key_value_store import IKeyValueStore
from src.core.interfaces.notifier import INotifier
from src.core.services.availability import AvailabilityResolver
from src.core.services.batch_mutator import BatchStatusMutator
from src.core.services.consumption_engine import ConsumptionEngine
from src.core.services.inventory_ledger import InventoryLedger
from src.core.services.item_classifier import ItemClassifier
from src.core.services.movement_log import StockMovementLog
from src.core.services.stock_analysis import StockAlerts, StockAnalyzer

logger = get_logger(__name__)

T = TypeVar("T")


def infer_status_movement(
    old: AssetStatus, new: AssetStatus
) -> MovementType | None:
    """Stock movement implied by a status transition, if any."""
    if old == new:
        return None
    if old == AssetStatus.IN_STORAGE:
        if new == AssetStatus.IN_USE:
            return MovementType.OUT_INSTALLATION
        if new == AssetStatus.DAMAGED:
            return MovementType.OUT_BROKEN
        return None
    if new == AssetStatus.IN_STORAGE:
        return MovementType.IN_RETURN
    return None


def _unit_quantity(unit: InventoryUnit) -> float:
    """Stock card quantity a whole unit represents."""
    return unit.available_balance if unit.is_measurement else 1


class InventoryService:
    """
    Facade over ledger, movement log, resolver, engine and batch mutator.

    Construct one per process and pass it to callers.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        catalog: ICatalogProvider | None = None,
        notifier: INotifier | None = None,
        settings: InventorySettings | None = None,
    ) -> None:
        self._settings = settings or get_settings().inventory
        self._catalog = catalog
        self._notifier = notifier
        self._lock = asyncio.Lock()

        self.ledger = InventoryLedger(store, self._settings)
        self.movements = StockMovementLog(store, self._settings)
        self.resolver = AvailabilityResolver(self.ledger)
        self.classifier = ItemClassifier(catalog)
        self.engine = ConsumptionEngine(self.ledger, self.movements, self.classifier)
        self.batch = BatchStatusMutator(self.ledger)
        self.analyzer = StockAnalyzer(store, self._settings)

    async def _locked(self, operation: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            return await operation()

    # --- Reads ---

    async def list_units(
        self,
        status: AssetStatus | None = None,
        item_name: str | None = None,
        brand: str | None = None,
    ) -> list[InventoryUnit]:
        units = await self.ledger.load()
        if item_name is not None and brand is not None:
            units = self.ledger.matching(units, item_name, brand)
        if status is not None:
            units = [u for u in units if u.status == status]
        return units

    async def get_unit(self, unit_id: str) -> InventoryUnit:
        return await self.ledger.get(unit_id)

    async def check_availability(
        self,
        item_name: str,
        brand: str,
        quantity_needed: float,
        fifo: bool = False,
    ) -> AvailabilityResult:
        units = await self.ledger.load()
        return self.resolver.check(units, item_name, brand, quantity_needed, fifo=fifo)

    async def get_stock_history(self, item_name: str, brand: str) -> list[StockMovement]:
        return await self.movements.history(item_name, brand)

    async def stock_alerts(self) -> StockAlerts:
        return await self.analyzer.analyze(await self.ledger.load())

    # --- Mutations ---

    async def register_asset(
        self,
        unit: InventoryUnit,
        quantity: float | None = None,
        actor: str | None = None,
    ) -> InventoryUnit:
        """
        Add a unit to the ledger and record its IN_PURCHASE movement.

        ``quantity`` is honoured for bulk-tracked types; measurement units
        default to their initial balance and everything else to one.
        """

        async def operation() -> InventoryUnit:
            units = await self.ledger.load()
            asset_type = None
            if self._catalog is not None and unit.category and unit.asset_type:
                asset_type = await self._catalog.get_type(unit.category, unit.asset_type)
            tracking = asset_type.tracking_method if asset_type else None

            prepared = self.ledger.prepare_new(unit, units, tracking_method=tracking)
            await self.ledger.commit([*units, prepared])

            if tracking == TrackingMethod.BULK and quantity:
                received = quantity
            else:
                received = _unit_quantity(prepared)

            await self.movements.record(
                StockMovementDraft(
                    asset_name=prepared.item_name,
                    brand=prepared.brand,
                    date=prepared.registration_date,
                    type=MovementType.IN_PURCHASE,
                    quantity=received,
                    reference_id=prepared.po_number or "Initial",
                    actor=actor or prepared.recorded_by,
                    notes="New stock received",
                )
            )
            logger.info(
                "asset_registered",
                unit_id=prepared.id,
                item_name=prepared.item_name,
                brand=prepared.brand,
                quantity=received,
            )
            return prepared

        return await self._locked(operation)

    async def update_asset(
        self,
        unit_id: str,
        patch: dict[str, Any],
        actor: str = "System",
    ) -> InventoryUnit:
        """
        Patch one unit. A status change across the storage boundary also
        records the implied stock movement; balance-only patches never do.
        """

        async def operation() -> InventoryUnit:
            units = await self.ledger.load()
            original = next((u for u in units if u.id == unit_id), None)
            if original is None:
                raise UnitNotFoundError(unit_id)

            effective = dict(patch)
            reference = effective.pop("wo_ro_int_number", None)
            new_status = (
                AssetStatus(effective["status"])
                if effective.get("status") is not None
                else original.status
            )
            status_changed = new_status != original.status
            if status_changed:
                effective = self.ledger.with_log_entry(
                    original,
                    effective,
                    ActivityLogEntry(
                        user=actor,
                        action="Status Changed",
                        details=f"{original.status.value} -> {new_status.value}",
                    ),
                )

            updated = self.ledger.apply_patches(units, {unit_id: effective})
            await self.ledger.commit(updated)
            result = next(u for u in updated if u.id == unit_id)

            movement_type = infer_status_movement(original.status, new_status)
            if movement_type is not None:
                await self.movements.record(
                    StockMovementDraft(
                        asset_name=original.item_name,
                        brand=original.brand,
                        type=movement_type,
                        quantity=_unit_quantity(result),
                        reference_id=reference or "Status Update",
                        actor=actor,
                        notes=(
                            "Automatic from status change:"
                            f" {original.status.value} -> {new_status.value}"
                        ),
                    )
                )

            if status_changed and new_status == AssetStatus.DAMAGED and self._notifier:
                await self._notifier.asset_damaged(result, actor)

            logger.info(
                "asset_updated",
                unit_id=unit_id,
                fields=sorted(patch),
                movement=movement_type.value if movement_type else None,
            )
            return result

        return await self._locked(operation)

    async def update_asset_batch(
        self,
        ids: list[str],
        patch: dict[str, Any],
        log_action: str | None = None,
        actor: str = "System",
    ) -> list[InventoryUnit]:
        return await self._locked(
            lambda: self.batch.update_asset_batch(ids, patch, log_action, actor)
        )

    async def assign_units(
        self,
        ids: list[str],
        holder: str,
        location: str | None = None,
        log_action: str = "Assigned",
        actor: str = "System",
    ) -> list[InventoryUnit]:
        return await self._locked(
            lambda: self.batch.assign_units(ids, holder, location, log_action, actor)
        )

    async def delete_asset(self, unit_id: str, actor: str = "System") -> InventoryUnit:
        """Remove a unit. Stock in storage leaves through an OUT_ADJUSTMENT."""

        async def operation() -> InventoryUnit:
            units = await self.ledger.load()
            target = next((u for u in units if u.id == unit_id), None)
            if target is None:
                raise UnitNotFoundError(unit_id)

            await self.ledger.commit([u for u in units if u.id != unit_id])
            if target.status == AssetStatus.IN_STORAGE:
                await self.movements.record(
                    StockMovementDraft(
                        asset_name=target.item_name,
                        brand=target.brand,
                        type=MovementType.OUT_ADJUSTMENT,
                        quantity=_unit_quantity(target),
                        reference_id="DELETE",
                        actor=actor,
                        notes="Asset removed from the system",
                    )
                )
            logger.info("asset_deleted", unit_id=unit_id, status=target.status.value)
            return target

        return await self._locked(operation)

    async def consume_materials(
        self,
        materials: list[AllocationRequest],
        context: ConsumptionContext,
    ) -> ConsumptionResult:
        return await self._locked(
            lambda: self.engine.consume_materials(materials, context)
        )

    async def record_movement(self, draft: StockMovementDraft) -> list[StockMovement]:
        return await self._locked(lambda: self.movements.record(draft))

    async def set_thresholds(self, thresholds: dict[str, int]) -> dict[str, int]:
        return await self._locked(lambda: self.analyzer.set_thresholds(thresholds))
