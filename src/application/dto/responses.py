"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ActivityLogEntryResponse(BaseModel):
    id: str
    timestamp: datetime
    user: str
    action: str
    details: str = ""


class InventoryUnitResponse(BaseModel):
    """Inventory unit response DTO."""

    id: str = Field(..., description="Unit ID")
    item_name: str
    brand: str
    category: str | None = None
    asset_type: str | None = None
    status: str = Field(..., description="Lifecycle status")
    is_measurement: bool = Field(..., description="True for cut-able units (drums, rolls)")
    initial_balance: float | None = None
    current_balance: float | None = None
    current_user: str | None = None
    location: str | None = None
    serial_number: str | None = None
    mac_address: str | None = None
    po_number: str | None = None
    recorded_by: str | None = None
    registration_date: datetime
    activity_log: list[ActivityLogEntryResponse] = Field(default_factory=list)


class InventoryUnitListResponse(BaseModel):
    units: list[InventoryUnitResponse]
    total: int


class StockMovementResponse(BaseModel):
    """Stock card entry."""

    id: str
    asset_name: str
    brand: str
    date: datetime
    type: str = Field(..., description="IN_* adds, OUT_* subtracts")
    quantity: float
    balance_after: float = Field(..., description="Running group balance after this entry")
    reference_id: str | None = None
    actor: str | None = None
    notes: str | None = None


class StockHistoryResponse(BaseModel):
    """Stock card for one model, newest entry first."""

    asset_name: str
    brand: str
    current_balance: float
    movements: list[StockMovementResponse]


class AvailabilityResponse(BaseModel):
    item_name: str
    brand: str
    quantity_needed: float
    available: float
    is_sufficient: bool
    recommended_source_ids: list[str] = Field(default_factory=list)
    physical: int = Field(default=0, description="Eligible units in storage")
    is_measurement: bool = False
    is_fragmented: bool = Field(
        default=False,
        description="Total covers the need but no single unit does",
    )


class ConsumeMaterialsResponse(BaseModel):
    """Outcome of a consumption batch. Shortfalls arrive as warnings."""

    success: bool
    warnings: list[str] = Field(default_factory=list)
    updated_unit_ids: list[str] = Field(default_factory=list)
    movements: list[StockMovementResponse] = Field(default_factory=list)


class BatchUpdateResponse(BaseModel):
    updated: list[InventoryUnitResponse]
    total: int


class ApproveLoanResponse(BaseModel):
    loan_id: str | None = None
    holder: str
    units: list[InventoryUnitResponse]


class StockLevelResponse(BaseModel):
    item_name: str
    brand: str
    category: str | None = None
    count: int = Field(..., description="Units in storage")
    quantity: float = Field(..., description="Measured balance, or count for count items")
    threshold: int


class RestockSuggestionResponse(BaseModel):
    item_name: str
    brand: str
    available: int
    target: int
    quantity: int
    note: str


class StockAlertsResponse(BaseModel):
    critical: list[StockLevelResponse] = Field(default_factory=list)
    low: list[StockLevelResponse] = Field(default_factory=list)
    total_critical: int = 0
    total_low: int = 0
    restock: list[RestockSuggestionResponse] = Field(default_factory=list)


class ProviderHealthResponse(BaseModel):
    """Provider health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    storage_backend: str
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. UNIT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
