"""Default notifier: administrator alerts go to the structured log."""

from src.config import get_logger
from src.core.entities.inventory import InventoryUnit
from src.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


class LoggingNotifier(INotifier):
    async def asset_damaged(self, unit: InventoryUnit, actor: str) -> None:
        logger.warning(
            "asset_damaged",
            unit_id=unit.id,
            item_name=unit.item_name,
            brand=unit.brand,
            serial_number=unit.serial_number,
            reported_by=actor,
        )
