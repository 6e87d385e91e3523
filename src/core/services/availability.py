"""Availability resolver: how much of a model is on hand, and where."""

import math

from src.core.entities.allocation import AvailabilityResult, ItemKind
from src.core.entities.inventory import InventoryUnit
from src.core.services.inventory_ledger import InventoryLedger
from src.core.services.item_classifier import kind_from_units


class AvailabilityResolver:
    """
    Read-only view over a ledger snapshot.

    Classification here is the ledger heuristic only; the consumption
    engine consults catalog metadata on top of it. Count-case candidates
    come in ledger order unless ``fifo`` is requested.
    """

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def check(
        self,
        units: list[InventoryUnit],
        item_name: str,
        brand: str,
        quantity_needed: float,
        fifo: bool = False,
    ) -> AvailabilityResult:
        if fifo:
            eligible = self._ledger.eligible_fifo(units, item_name, brand)
        else:
            eligible = self._ledger.eligible(units, item_name, brand)

        matching = self._ledger.matching(units, item_name, brand)
        is_measurement = kind_from_units(matching) == ItemKind.MEASUREMENT

        if not eligible:
            return AvailabilityResult(
                available=0,
                is_sufficient=quantity_needed <= 0,
                recommended_source_ids=[],
                is_measurement=is_measurement,
            )

        if is_measurement:
            return self._measurement(eligible, quantity_needed)
        return self._count(eligible, quantity_needed)

    def _measurement(
        self, eligible: list[InventoryUnit], quantity_needed: float
    ) -> AvailabilityResult:
        eps = self._ledger.settings.balance_epsilon
        balances = [u.available_balance for u in eligible]
        available = round(sum(balances), self._ledger.settings.balance_precision)
        is_sufficient = available + eps >= quantity_needed
        return AvailabilityResult(
            available=available,
            is_sufficient=is_sufficient,
            recommended_source_ids=[u.id for u in eligible],
            physical=len(eligible),
            is_measurement=True,
            is_fragmented=(
                quantity_needed > 0
                and is_sufficient
                and max(balances) + eps < quantity_needed
            ),
        )

    @staticmethod
    def _count(
        eligible: list[InventoryUnit], quantity_needed: float
    ) -> AvailabilityResult:
        wanted = max(0, math.ceil(quantity_needed))
        return AvailabilityResult(
            available=len(eligible),
            is_sufficient=len(eligible) >= quantity_needed,
            recommended_source_ids=[u.id for u in eligible[:wanted]],
            physical=len(eligible),
            is_measurement=False,
        )
