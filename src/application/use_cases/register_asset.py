"""Register Asset Use Case: add a unit and record its IN_PURCHASE entry."""

from uuid import uuid4

from src.application.dto.requests import RegisterAssetRequest
from src.application.dto.responses import InventoryUnitResponse
from src.application.mappers import unit_to_response
from src.core.entities.inventory import ActivityLogEntry, InventoryUnit
from src.core.services import InventoryService


def new_unit_id() -> str:
    return f"AST-{uuid4().hex[:10].upper()}"


class RegisterAssetUseCase:
    def __init__(self, service: InventoryService | None = None):
        self._service = service

    def _get_service(self) -> InventoryService:
        if self._service is None:
            from src.application.services import get_inventory_service

            self._service = get_inventory_service()
        return self._service

    async def execute(self, request: RegisterAssetRequest) -> InventoryUnit:
        data = request.model_dump(exclude={"id", "quantity"}, exclude_none=True)
        actor = request.recorded_by or "System"
        unit = InventoryUnit(
            id=request.id or new_unit_id(),
            activity_log=[
                ActivityLogEntry(
                    user=actor,
                    action="Registered",
                    details=f"Received {request.item_name} ({request.brand})",
                )
            ],
            **data,
        )
        return await self._get_service().register_asset(
            unit, quantity=request.quantity, actor=actor
        )

    def to_response(self, result: InventoryUnit) -> InventoryUnitResponse:
        return unit_to_response(result)
