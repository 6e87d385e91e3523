"""Batch Update Assets Use Case: one uniform change over many units."""

from src.application.dto.requests import BatchUpdateAssetsRequest
from src.application.dto.responses import BatchUpdateResponse
from src.application.mappers import unit_to_response
from src.core.entities.inventory import InventoryUnit
from src.core.exceptions import ValidationError
from src.core.services import InventoryService


class BatchUpdateAssetsUseCase:
    def __init__(self, service: InventoryService | None = None):
        self._service = service

    def _get_service(self) -> InventoryService:
        if self._service is None:
            from src.application.services import get_inventory_service

            self._service = get_inventory_service()
        return self._service

    async def execute(self, request: BatchUpdateAssetsRequest) -> list[InventoryUnit]:
        patch = request.model_dump(
            include={"status", "current_user", "location"},
            exclude_unset=True,
        )
        if not patch:
            raise ValidationError("patch", "at least one of status, current_user, location")

        return await self._get_service().update_asset_batch(
            request.ids,
            patch,
            log_action=request.log_action,
            actor=request.actor,
        )

    def to_response(self, result: list[InventoryUnit]) -> BatchUpdateResponse:
        return BatchUpdateResponse(
            updated=[unit_to_response(u) for u in result],
            total=len(result),
        )
