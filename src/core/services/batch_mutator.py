"""Batch status mutator: one uniform change over many units, one write."""

from typing import Any

from src.config import get_logger
from src.core.entities.inventory import ActivityLogEntry, AssetStatus, InventoryUnit
from src.core.exceptions import UnitsUnavailableError
from src.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)

DEFAULT_BATCH_ACTION = "Batch Update"


def summarize_patch(patch: dict[str, Any]) -> str:
    """Audit text for a patch: the new status when there is one."""
    status = patch.get("status")
    if status is not None:
        return f"Status changed to {AssetStatus(status).value}"
    fields = sorted(k for k in patch if k != "activity_log")
    return f"Updated fields: {', '.join(fields)}" if fields else "No field changes"


class BatchStatusMutator:
    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def plan(
        self,
        units: list[InventoryUnit],
        ids: list[str],
        patch: dict[str, Any],
        log_action: str | None = None,
        actor: str = "System",
    ) -> tuple[list[InventoryUnit], list[InventoryUnit]]:
        """
        Apply ``patch`` to every unit in ``ids``.

        Returns the full updated ledger and the affected units. Each
        affected unit gets its own audit entry.
        """
        wanted = set(ids)
        details = summarize_patch(patch)
        patches = {}
        for unit in units:
            if unit.id not in wanted:
                continue
            entry = ActivityLogEntry(
                user=actor,
                action=log_action or DEFAULT_BATCH_ACTION,
                details=details,
            )
            patches[unit.id] = self._ledger.with_log_entry(unit, patch, entry)

        updated = self._ledger.apply_patches(units, patches)
        affected = [u for u in updated if u.id in patches]
        return updated, affected

    async def update_asset_batch(
        self,
        ids: list[str],
        patch: dict[str, Any],
        log_action: str | None = None,
        actor: str = "System",
    ) -> list[InventoryUnit]:
        """Apply a patch to a set of units and persist them in one save."""
        units = await self._ledger.load()
        updated, affected = self.plan(units, ids, patch, log_action, actor)
        await self._ledger.commit(updated)

        logger.info(
            "asset_batch_updated",
            requested=len(ids),
            affected=len(affected),
            action=log_action or DEFAULT_BATCH_ACTION,
        )
        return affected

    async def assign_units(
        self,
        ids: list[str],
        holder: str,
        location: str | None = None,
        log_action: str = "Assigned",
        actor: str = "System",
    ) -> list[InventoryUnit]:
        """
        Hand units to a holder (loan approval, handover).

        Every unit must still be IN_STORAGE; otherwise nothing is written
        and the conflicting units are reported.
        """
        units = await self._ledger.load()
        by_id = {u.id: u for u in units}
        conflicting = [
            uid
            for uid in ids
            if uid not in by_id or by_id[uid].status != AssetStatus.IN_STORAGE
        ]
        if conflicting:
            logger.warning("assignment_conflict", unit_ids=conflicting, holder=holder)
            raise UnitsUnavailableError(
                conflicting,
                [by_id[uid].item_name if uid in by_id else uid for uid in conflicting],
            )

        patch = {
            "status": AssetStatus.IN_USE,
            "current_user": holder,
            "location": location or f"On loan: {holder}",
        }
        updated, affected = self.plan(units, ids, patch, log_action, actor)
        await self._ledger.commit(updated)

        logger.info("units_assigned", holder=holder, units=len(affected))
        return affected
