"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    ApproveLoanRequest,
    BatchUpdateAssetsRequest,
    ConsumeMaterialsRequest,
    MaterialLineRequest,
    RecordMovementRequest,
    RegisterAssetRequest,
    StockThresholdsRequest,
    UpdateAssetRequest,
)
from src.application.dto.responses import (
    ActivityLogEntryResponse,
    ApproveLoanResponse,
    AvailabilityResponse,
    BatchUpdateResponse,
    ConsumeMaterialsResponse,
    ErrorResponse,
    HealthResponse,
    InventoryUnitListResponse,
    InventoryUnitResponse,
    ProviderHealthResponse,
    RestockSuggestionResponse,
    StockAlertsResponse,
    StockHistoryResponse,
    StockLevelResponse,
    StockMovementResponse,
)

__all__ = [
    # Requests
    "MaterialLineRequest",
    "ConsumeMaterialsRequest",
    "RegisterAssetRequest",
    "UpdateAssetRequest",
    "BatchUpdateAssetsRequest",
    "ApproveLoanRequest",
    "RecordMovementRequest",
    "StockThresholdsRequest",
    # Responses
    "ActivityLogEntryResponse",
    "InventoryUnitResponse",
    "InventoryUnitListResponse",
    "StockMovementResponse",
    "StockHistoryResponse",
    "AvailabilityResponse",
    "ConsumeMaterialsResponse",
    "BatchUpdateResponse",
    "ApproveLoanResponse",
    "StockLevelResponse",
    "RestockSuggestionResponse",
    "StockAlertsResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
