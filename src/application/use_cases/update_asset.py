"""Update Asset Use Case: patch one unit, with status-transition side effects."""

from src.application.dto.requests import UpdateAssetRequest
from src.application.dto.responses import InventoryUnitResponse
from src.application.mappers import unit_to_response
from src.core.entities.inventory import InventoryUnit
from src.core.exceptions import ValidationError
from src.core.services import InventoryService


class UpdateAssetUseCase:
    def __init__(self, service: InventoryService | None = None):
        self._service = service

    def _get_service(self) -> InventoryService:
        if self._service is None:
            from src.application.services import get_inventory_service

            self._service = get_inventory_service()
        return self._service

    async def execute(self, unit_id: str, request: UpdateAssetRequest) -> InventoryUnit:
        # Only fields the caller actually sent; an explicit null clears a field
        patch = request.model_dump(exclude_unset=True)
        if not patch:
            raise ValidationError("patch", "at least one field must be provided")
        if "status" in patch and patch["status"] is None:
            raise ValidationError("status", "status cannot be cleared")

        return await self._get_service().update_asset(unit_id, patch, actor=request.actor)

    def to_response(self, result: InventoryUnit) -> InventoryUnitResponse:
        return unit_to_response(result)
