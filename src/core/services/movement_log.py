"""
Stock movement log (stock card).

Movements are grouped by (asset_name, brand). Whenever a group gains an
entry, the whole group is re-sorted by date and its running
``balance_after`` is recomputed from zero, so back-dated entries correct
every later balance. Other groups are carried over untouched.
"""

import time
from collections.abc import Iterable
from uuid import uuid4

from src.config import InventorySettings, get_logger, get_settings
from src.core.entities.inventory import (
    StockMovement,
    StockMovementDraft,
    identity_key,
)
from src.core.interfaces.key_value_store import STOCK_MOVEMENTS, IKeyValueStore
from src.core.services.persistence import save_collection

logger = get_logger(__name__)


def new_movement_id() -> str:
    """Time-prefixed id; ties on ``date`` fall back to creation order."""
    return f"MOV-{time.time_ns():020d}-{uuid4().hex[:6]}"


def recompute_group(
    movements: Iterable[StockMovement],
    precision: int | None = None,
) -> list[StockMovement]:
    """
    Re-walk one group in date order and refresh every ``balance_after``.

    IN_* entries add their quantity; everything else subtracts, floored
    at zero. Pure: returns new objects, input order is irrelevant.
    """
    ordered = sorted(movements, key=lambda m: (m.date, m.id))
    balance = 0.0
    recalculated = []
    for movement in ordered:
        if movement.type.is_inbound:
            balance += movement.quantity
        else:
            balance = max(0.0, balance - movement.quantity)
        if precision is not None:
            balance = round(balance, precision)
        recalculated.append(movement.model_copy(update={"balance_after": balance}))
    return recalculated


class StockMovementLog:
    """Append-only journal of quantity changes per (asset_name, brand)."""

    def __init__(
        self,
        store: IKeyValueStore,
        settings: InventorySettings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings().inventory

    def key(self, asset_name: str, brand: str) -> tuple[str, str]:
        return identity_key(asset_name, brand, self._settings.normalize_identity)

    async def load(self) -> list[StockMovement]:
        rows = await self._store.load(STOCK_MOVEMENTS)
        return [StockMovement.model_validate(row) for row in rows]

    @staticmethod
    def build(draft: StockMovementDraft) -> StockMovement:
        """Turn a draft into a movement: fresh id, magnitude-only quantity."""
        data = draft.model_dump()
        data["quantity"] = abs(draft.quantity)
        return StockMovement(id=new_movement_id(), balance_after=0.0, **data)

    def merge(
        self,
        existing: list[StockMovement],
        new: list[StockMovement],
    ) -> list[StockMovement]:
        """Add ``new`` to ``existing``, recomputing only the touched groups."""
        touched: dict[tuple[str, str], list[StockMovement]] = {}
        for movement in new:
            touched.setdefault(self.key(movement.asset_name, movement.brand), []).append(
                movement
            )

        others: list[StockMovement] = []
        for movement in existing:
            group_key = self.key(movement.asset_name, movement.brand)
            if group_key in touched:
                touched[group_key].append(movement)
            else:
                others.append(movement)

        merged = list(others)
        for group in touched.values():
            merged.extend(recompute_group(group, self._settings.balance_precision))
        return merged

    async def append(self, movements: list[StockMovement]) -> list[StockMovement]:
        """Persist already-built movements and return the full updated log."""
        if not movements:
            return await self.load()

        merged = self.merge(await self.load(), movements)
        await save_collection(
            self._store,
            STOCK_MOVEMENTS,
            [m.model_dump(mode="json") for m in merged],
            timeout=self._settings.persist_timeout,
        )
        for movement in movements:
            logger.info(
                "movement_recorded",
                movement_id=movement.id,
                asset_name=movement.asset_name,
                brand=movement.brand,
                type=movement.type.value,
                qty=movement.quantity,
                reference=movement.reference_id,
            )
        return merged

    async def record(self, draft: StockMovementDraft) -> list[StockMovement]:
        """Record one movement and return the full updated log."""
        return await self.append([self.build(draft)])

    async def record_many(
        self, drafts: list[StockMovementDraft]
    ) -> list[StockMovement]:
        """Record several movements with a single recompute and save."""
        return await self.append([self.build(d) for d in drafts])

    async def history(self, asset_name: str, brand: str) -> list[StockMovement]:
        """Stock card for one model, newest first."""
        key = self.key(asset_name, brand)
        group = [
            m for m in await self.load() if self.key(m.asset_name, m.brand) == key
        ]
        return sorted(group, key=lambda m: (m.date, m.id), reverse=True)

    async def current_balance(self, asset_name: str, brand: str) -> float:
        history = await self.history(asset_name, brand)
        return history[0].balance_after if history else 0.0
