"""Consume Materials Use Case: cut / install materials for a work order."""

from src.application.dto.requests import ConsumeMaterialsRequest
from src.application.dto.responses import ConsumeMaterialsResponse
from src.application.mappers import movement_to_response
from src.config import get_logger
from src.core.entities.allocation import (
    AllocationRequest,
    ConsumptionContext,
    ConsumptionResult,
)
from src.core.services import InventoryService

logger = get_logger(__name__)


class ConsumeMaterialsUseCase:
    """Validate material lines at the boundary and hand them to the engine."""

    def __init__(self, service: InventoryService | None = None):
        self._service = service

    def _get_service(self) -> InventoryService:
        if self._service is None:
            from src.application.services import get_inventory_service

            self._service = get_inventory_service()
        return self._service

    async def execute(self, request: ConsumeMaterialsRequest) -> ConsumptionResult:
        materials = [
            AllocationRequest(
                item_name=line.item_name,
                brand=line.brand,
                quantity=line.quantity,
                unit=line.unit,
                material_asset_id=line.material_asset_id,
            )
            for line in request.materials
        ]
        context = ConsumptionContext(
            customer_id=request.customer_id,
            location=request.location,
            doc_number=request.doc_number,
            actor=request.actor,
        )

        result = await self._get_service().consume_materials(materials, context)
        if result.warnings:
            logger.info(
                "consumption_completed_with_warnings",
                doc_number=request.doc_number,
                warnings=result.warnings,
            )
        return result

    def to_response(self, result: ConsumptionResult) -> ConsumeMaterialsResponse:
        return ConsumeMaterialsResponse(
            success=result.success,
            warnings=result.warnings,
            updated_unit_ids=result.updated_unit_ids,
            movements=[movement_to_response(m) for m in result.movements],
        )
