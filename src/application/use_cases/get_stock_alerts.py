"""Stock Alerts Use Case: critical / low models with restock suggestions."""

from dataclasses import dataclass, field

from src.application.dto.responses import (
    RestockSuggestionResponse,
    StockAlertsResponse,
    StockLevelResponse,
)
from src.core.services import InventoryService, RestockSuggestion, StockAlerts, StockLevel


@dataclass
class StockAlertsResult:
    alerts: StockAlerts
    restock: list[RestockSuggestion] = field(default_factory=list)


def _level_response(level: StockLevel) -> StockLevelResponse:
    return StockLevelResponse(
        item_name=level.item_name,
        brand=level.brand,
        category=level.category,
        count=level.count,
        quantity=level.quantity,
        threshold=level.threshold,
    )


class GetStockAlertsUseCase:
    def __init__(self, service: InventoryService | None = None):
        self._service = service

    def _get_service(self) -> InventoryService:
        if self._service is None:
            from src.application.services import get_inventory_service

            self._service = get_inventory_service()
        return self._service

    async def execute(self) -> StockAlertsResult:
        service = self._get_service()
        alerts = await service.stock_alerts()
        restock = [
            service.analyzer.suggest_restock(level.item_name, level.brand, level.count)
            for level in [*alerts.critical, *alerts.low]
        ]
        return StockAlertsResult(alerts=alerts, restock=restock)

    def to_response(self, result: StockAlertsResult) -> StockAlertsResponse:
        return StockAlertsResponse(
            critical=[_level_response(lv) for lv in result.alerts.critical],
            low=[_level_response(lv) for lv in result.alerts.low],
            total_critical=result.alerts.total_critical,
            total_low=result.alerts.total_low,
            restock=[
                RestockSuggestionResponse(
                    item_name=s.item_name,
                    brand=s.brand,
                    available=s.available,
                    target=s.target,
                    quantity=s.quantity,
                    note=s.note,
                )
                for s in result.restock
            ],
        )
