"""Abstract interface for outbound notifications."""

from abc import ABC, abstractmethod

from src.core.entities.inventory import InventoryUnit


class INotifier(ABC):
    """Receives ledger events that administrators should hear about."""

    @abstractmethod
    async def asset_damaged(self, unit: InventoryUnit, actor: str) -> None:
        """A unit was just marked DAMAGED."""
        pass
