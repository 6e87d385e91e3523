"""
Allocation / consumption engine.

Turns a list of requested material lines into ledger mutations and
OUT_INSTALLATION stock movements.

Sourcing:
- A pinned unit is used alone when it is still in storage (as seen by
  this batch) and belongs to the requested model. Otherwise the pin is
  dropped with a warning and sourcing falls back to FIFO.
- FIFO = IN_STORAGE units of the model, oldest ``registration_date``
  first.

Measurement lines walk the candidates cutting balances; a unit drained to
zero becomes CONSUMED. Count lines move whole units to IN_USE. Every unit
touched by the batch accumulates its changes in one pending patch, so two
lines drawing on the same drum compose instead of overwriting each
other. Shortfalls are reported as warnings, never raised.
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from src.config import get_logger
from src.core.entities.allocation import (
    AllocationRequest,
    Classification,
    ConsumptionContext,
    ConsumptionResult,
)
from src.core.entities.inventory import (
    ActivityLogEntry,
    AssetStatus,
    InventoryUnit,
    MovementType,
    StockMovement,
    StockMovementDraft,
)
from src.core.services.inventory_ledger import InventoryLedger
from src.core.services.item_classifier import ItemClassifier
from src.core.services.movement_log import StockMovementLog

logger = get_logger(__name__)

DEFAULT_REFERENCE = "Usage"


def format_quantity(value: float) -> str:
    """120.0 -> '120', 12.5 -> '12.5'."""
    return f"{value:f}".rstrip("0").rstrip(".")


@dataclass
class ConsumptionPlan:
    """Everything one batch wants to change, before anything is written."""

    patches: dict[str, dict[str, Any]] = field(default_factory=dict)
    drafts: list[StockMovementDraft] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    shortfall: bool = False
    # measurement draw per unit within this batch
    drawn: dict[str, float] = field(default_factory=lambda: defaultdict(float))
    # count units handed out within this batch
    taken: set[str] = field(default_factory=set)


class ConsumptionEngine:
    def __init__(
        self,
        ledger: InventoryLedger,
        movement_log: StockMovementLog,
        classifier: ItemClassifier,
    ) -> None:
        self._ledger = ledger
        self._movement_log = movement_log
        self._classifier = classifier

    @property
    def _eps(self) -> float:
        return self._ledger.settings.balance_epsilon

    async def consume_materials(
        self,
        materials: list[AllocationRequest],
        context: ConsumptionContext,
    ) -> ConsumptionResult:
        """
        Consume requested materials against the current ledger.

        The ledger is written once after every line is planned, then all
        movements are appended in one save. Callers serialize concurrent
        invocations (see ``InventoryService``).
        """
        if not materials:
            return ConsumptionResult(success=True)

        logger.info(
            "consumption_started",
            lines=len(materials),
            doc_number=context.doc_number,
            customer_id=context.customer_id,
        )

        units = await self._ledger.load()
        plan = await self.plan(units, materials, context)

        updated = self._ledger.apply_patches(units, plan.patches)
        await self._ledger.commit(updated)

        built = [self._movement_log.build(d) for d in plan.drafts]
        full_log = await self._movement_log.append(built)
        built_ids = {m.id for m in built}
        recorded: list[StockMovement] = [m for m in full_log if m.id in built_ids]

        logger.info(
            "materials_consumed",
            lines=len(materials),
            units_touched=len(plan.patches),
            warnings=len(plan.warnings),
            doc_number=context.doc_number,
        )

        return ConsumptionResult(
            success=not plan.shortfall,
            warnings=plan.warnings,
            updated_unit_ids=[u.id for u in units if u.id in plan.patches],
            movements=recorded,
        )

    async def plan(
        self,
        units: list[InventoryUnit],
        materials: list[AllocationRequest],
        context: ConsumptionContext,
    ) -> ConsumptionPlan:
        """Work out every unit change and movement for a batch. No I/O on the ledger."""
        plan = ConsumptionPlan()
        by_id = {u.id: u for u in units}

        for line in materials:
            matching = self._ledger.matching(units, line.item_name, line.brand)
            classification = await self._classifier.classify(
                line.item_name, line.brand, matching
            )
            candidates = self._candidates(line, units, by_id, plan)

            if classification.is_measurement:
                self._consume_measurement(line, classification, candidates, plan)
            else:
                self._consume_count(line, classification, candidates, context, plan)

            plan.drafts.append(
                StockMovementDraft(
                    asset_name=line.item_name,
                    brand=line.brand,
                    type=MovementType.OUT_INSTALLATION,
                    quantity=line.quantity,
                    reference_id=context.doc_number or DEFAULT_REFERENCE,
                    actor=context.actor,
                    notes=self._movement_note(context),
                )
            )

        self._stamp_activity(by_id, plan, context)
        return plan

    # --- Sourcing ---

    def _effective_status(self, unit: InventoryUnit, plan: ConsumptionPlan) -> AssetStatus:
        return AssetStatus(plan.patches.get(unit.id, {}).get("status", unit.status))

    def _is_available(self, unit: InventoryUnit, plan: ConsumptionPlan) -> bool:
        if self._effective_status(unit, plan) != AssetStatus.IN_STORAGE:
            return False
        return unit.id not in plan.taken

    def _candidates(
        self,
        line: AllocationRequest,
        units: list[InventoryUnit],
        by_id: dict[str, InventoryUnit],
        plan: ConsumptionPlan,
    ) -> list[InventoryUnit]:
        if line.material_asset_id:
            pinned = by_id.get(line.material_asset_id)
            if (
                pinned is not None
                and self._ledger.unit_key(pinned)
                == self._ledger.key(line.item_name, line.brand)
                and self._is_available(pinned, plan)
            ):
                return [pinned]

            plan.warnings.append(
                f"Pinned unit {line.material_asset_id} is not available in storage;"
                f" {line.item_name} was sourced automatically (FIFO)."
            )
            logger.warning(
                "pinned_unit_fallback",
                material_asset_id=line.material_asset_id,
                item_name=line.item_name,
                brand=line.brand,
            )

        return [
            u
            for u in self._ledger.eligible_fifo(units, line.item_name, line.brand)
            if self._is_available(u, plan)
        ]

    # --- Measurement (cut) ---

    def _consume_measurement(
        self,
        line: AllocationRequest,
        classification: Classification,
        candidates: list[InventoryUnit],
        plan: ConsumptionPlan,
    ) -> None:
        remaining = line.quantity

        for unit in candidates:
            if remaining <= self._eps:
                break

            effective = unit.available_balance - plan.drawn[unit.id]
            if effective <= self._eps:
                continue

            patch = plan.patches.setdefault(unit.id, {})
            if effective - remaining > self._eps:
                plan.drawn[unit.id] += remaining
                patch["current_balance"] = unit.available_balance - plan.drawn[unit.id]
                patch["status"] = AssetStatus.IN_STORAGE
                remaining = 0.0
            else:
                plan.drawn[unit.id] += effective
                patch["current_balance"] = 0.0
                patch["status"] = AssetStatus.CONSUMED
                remaining -= effective

        if remaining > self._eps:
            self._report_shortfall(line, classification, remaining, plan)

    # --- Count (container) ---

    def _consume_count(
        self,
        line: AllocationRequest,
        classification: Classification,
        candidates: list[InventoryUnit],
        context: ConsumptionContext,
        plan: ConsumptionPlan,
    ) -> None:
        needed = max(0, math.ceil(line.quantity - self._eps))
        chosen = candidates[: min(needed, len(candidates))]

        for unit in chosen:
            patch = plan.patches.setdefault(unit.id, {})
            patch["status"] = AssetStatus.IN_USE
            patch["current_user"] = context.customer_id
            if context.location:
                patch["location"] = f"Installed at: {context.location}"
            plan.taken.add(unit.id)

        if len(chosen) < needed:
            self._report_shortfall(line, classification, needed - len(chosen), plan)

    # --- Bookkeeping ---

    def _report_shortfall(
        self,
        line: AllocationRequest,
        classification: Classification,
        missing: float,
        plan: ConsumptionPlan,
    ) -> None:
        unit = line.unit or classification.unit or (
            "Meter" if classification.is_measurement else "Pcs"
        )
        plan.shortfall = True
        plan.warnings.append(
            f"Insufficient stock for {line.item_name} ({line.brand}):"
            f" short by {format_quantity(missing)} {unit}."
        )
        logger.warning(
            "stock_shortfall",
            item_name=line.item_name,
            brand=line.brand,
            requested=line.quantity,
            missing=missing,
            unit=unit,
        )

    def _stamp_activity(
        self,
        by_id: dict[str, InventoryUnit],
        plan: ConsumptionPlan,
        context: ConsumptionContext,
    ) -> None:
        """One audit entry per touched unit, covering all of its lines."""
        reference = context.doc_number or DEFAULT_REFERENCE
        for unit_id, patch in plan.patches.items():
            unit = by_id[unit_id]
            if unit_id in plan.taken:
                entry = ActivityLogEntry(
                    user=context.actor,
                    action="Material Installed",
                    details=f"Installed for {context.customer_id or '-'} ({reference})",
                )
            else:
                entry = ActivityLogEntry(
                    user=context.actor,
                    action="Material Consumed",
                    details=(
                        f"Used {format_quantity(plan.drawn[unit_id])},"
                        f" remaining {format_quantity(patch['current_balance'])}"
                        f" ({reference})"
                    ),
                )
            plan.patches[unit_id] = self._ledger.with_log_entry(unit, patch, entry)

    @staticmethod
    def _movement_note(context: ConsumptionContext) -> str:
        if context.customer_id:
            return f"Material usage for customer {context.customer_id}"
        return "Material usage"
