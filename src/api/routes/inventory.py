"""Inventory endpoints: units, consumption, loans, stock cards and alerts."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_approve_loan_use_case,
    get_batch_update_use_case,
    get_consume_materials_use_case,
    get_inventory,
    get_register_asset_use_case,
    get_stock_alerts_use_case,
    get_update_asset_use_case,
)
from src.application.dto.requests import (
    ApproveLoanRequest,
    BatchUpdateAssetsRequest,
    ConsumeMaterialsRequest,
    RecordMovementRequest,
    RegisterAssetRequest,
    StockThresholdsRequest,
    UpdateAssetRequest,
)
from src.application.dto.responses import (
    ApproveLoanResponse,
    AvailabilityResponse,
    BatchUpdateResponse,
    ConsumeMaterialsResponse,
    ErrorResponse,
    InventoryUnitListResponse,
    InventoryUnitResponse,
    StockAlertsResponse,
    StockHistoryResponse,
)
from src.application.mappers import movement_to_response, unit_to_response
from src.application.use_cases import (
    ApproveLoanUseCase,
    BatchUpdateAssetsUseCase,
    ConsumeMaterialsUseCase,
    GetStockAlertsUseCase,
    RegisterAssetUseCase,
    UpdateAssetUseCase,
)
from src.core.entities.inventory import AssetStatus, StockMovementDraft
from src.core.services import InventoryService

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


# --- Units ---


@router.get("/units", response_model=InventoryUnitListResponse)
async def list_units(
    status_filter: AssetStatus | None = Query(default=None, alias="status"),
    item_name: str | None = None,
    brand: str | None = None,
    service: InventoryService = Depends(get_inventory),
) -> InventoryUnitListResponse:
    """List units, optionally narrowed to one model and/or status."""
    units = await service.list_units(status=status_filter, item_name=item_name, brand=brand)
    return InventoryUnitListResponse(
        units=[unit_to_response(u) for u in units],
        total=len(units),
    )


@router.post(
    "/units",
    response_model=InventoryUnitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def register_unit(
    request: RegisterAssetRequest,
    use_case: RegisterAssetUseCase = Depends(get_register_asset_use_case),
) -> InventoryUnitResponse:
    """Register a unit and record its IN_PURCHASE stock card entry."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/units/batch",
    response_model=BatchUpdateResponse,
    responses={400: {"model": ErrorResponse}},
)
async def batch_update_units(
    request: BatchUpdateAssetsRequest,
    use_case: BatchUpdateAssetsUseCase = Depends(get_batch_update_use_case),
) -> BatchUpdateResponse:
    """Apply one change to many units in a single write."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/units/{unit_id}",
    response_model=InventoryUnitResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_unit(
    unit_id: str,
    service: InventoryService = Depends(get_inventory),
) -> InventoryUnitResponse:
    return unit_to_response(await service.get_unit(unit_id))


@router.patch(
    "/units/{unit_id}",
    response_model=InventoryUnitResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def update_unit(
    unit_id: str,
    request: UpdateAssetRequest,
    use_case: UpdateAssetUseCase = Depends(get_update_asset_use_case),
) -> InventoryUnitResponse:
    """Patch a unit. Status changes across storage record a stock movement."""
    result = await use_case.execute(unit_id, request)
    return use_case.to_response(result)


@router.delete(
    "/units/{unit_id}",
    response_model=InventoryUnitResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_unit(
    unit_id: str,
    actor: str = "System",
    service: InventoryService = Depends(get_inventory),
) -> InventoryUnitResponse:
    """Delete a unit; stock still in storage leaves via OUT_ADJUSTMENT."""
    return unit_to_response(await service.delete_asset(unit_id, actor=actor))


# --- Allocation ---


@router.get("/availability", response_model=AvailabilityResponse)
async def check_availability(
    item_name: str,
    brand: str,
    quantity: float = Query(default=0, ge=0),
    fifo: bool = False,
    service: InventoryService = Depends(get_inventory),
) -> AvailabilityResponse:
    """How much of a model is in storage and which units would supply it."""
    result = await service.check_availability(item_name, brand, quantity, fifo=fifo)
    return AvailabilityResponse(
        item_name=item_name,
        brand=brand,
        quantity_needed=quantity,
        **result.model_dump(),
    )


@router.post("/consume", response_model=ConsumeMaterialsResponse)
async def consume_materials(
    request: ConsumeMaterialsRequest,
    use_case: ConsumeMaterialsUseCase = Depends(get_consume_materials_use_case),
) -> ConsumeMaterialsResponse:
    """Consume materials for a work order. Shortfalls are returned as warnings."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/assign",
    response_model=ApproveLoanResponse,
    responses={409: {"model": ErrorResponse}},
)
async def assign_units(
    request: ApproveLoanRequest,
    use_case: ApproveLoanUseCase = Depends(get_approve_loan_use_case),
) -> ApproveLoanResponse:
    """Approve a loan: every unit must still be in storage."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


# --- Stock cards ---


async def _history(service: InventoryService, item_name: str, brand: str) -> StockHistoryResponse:
    movements = await service.get_stock_history(item_name, brand)
    return StockHistoryResponse(
        asset_name=item_name,
        brand=brand,
        current_balance=movements[0].balance_after if movements else 0.0,
        movements=[movement_to_response(m) for m in movements],
    )


@router.get("/movements", response_model=StockHistoryResponse)
async def stock_history(
    item_name: str,
    brand: str,
    service: InventoryService = Depends(get_inventory),
) -> StockHistoryResponse:
    """Stock card for one model, newest first."""
    return await _history(service, item_name, brand)


@router.post(
    "/movements",
    response_model=StockHistoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_movement(
    request: RecordMovementRequest,
    service: InventoryService = Depends(get_inventory),
) -> StockHistoryResponse:
    """Record a manual stock card entry; back-dated entries rebalance later ones."""
    draft = StockMovementDraft(**request.model_dump(exclude_none=True))
    await service.record_movement(draft)
    return await _history(service, request.asset_name, request.brand)


# --- Alerts ---


@router.get("/alerts", response_model=StockAlertsResponse)
async def stock_alerts(
    use_case: GetStockAlertsUseCase = Depends(get_stock_alerts_use_case),
) -> StockAlertsResponse:
    """Critical (out of stock) and low models with restock suggestions."""
    result = await use_case.execute()
    return use_case.to_response(result)


@router.put("/alerts/thresholds", response_model=StockThresholdsRequest)
async def set_thresholds(
    request: StockThresholdsRequest,
    service: InventoryService = Depends(get_inventory),
) -> StockThresholdsRequest:
    """Replace the per-model low stock thresholds."""
    thresholds = await service.set_thresholds(request.thresholds)
    return StockThresholdsRequest(thresholds=thresholds)
