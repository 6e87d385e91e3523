"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.entities.inventory import AssetStatus, MovementType

# --- Consumption ---


class MaterialLineRequest(BaseModel):
    """One material line of a work order / installation report."""

    item_name: str = Field(..., min_length=1, description="Model name", examples=["Cable UTP Cat6"])
    brand: str = Field(..., min_length=1, description="Model brand", examples=["Belden"])
    quantity: float = Field(..., gt=0, description="Requested quantity (meters or pieces)")
    unit: str | None = Field(default=None, description="Unit label used in warnings")
    material_asset_id: str | None = Field(
        default=None,
        description="Pin the line to one physical unit (e.g. a specific drum)",
    )


class ConsumeMaterialsRequest(BaseModel):
    """Request to consume materials for an installation or repair."""

    materials: list[MaterialLineRequest] = Field(default_factory=list)
    customer_id: str | None = Field(default=None, description="Customer receiving the material")
    location: str | None = Field(default=None, description="Installation site")
    doc_number: str | None = Field(
        default=None,
        description="Work order / report number used as movement reference",
        examples=["WO-2024-0012"],
    )
    actor: str = Field(default="System", description="Who performed the consumption")


# --- Units ---


class RegisterAssetRequest(BaseModel):
    """Request to register a new inventory unit."""

    id: str | None = Field(default=None, description="Unit ID (generated when omitted)")
    item_name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    category: str | None = None
    asset_type: str | None = None
    status: AssetStatus = AssetStatus.IN_STORAGE
    initial_balance: float | None = Field(
        default=None, ge=0, description="Set for measurement units (e.g. drum length)"
    )
    current_balance: float | None = Field(default=None, ge=0)
    quantity: float | None = Field(
        default=None, gt=0, description="Received quantity for bulk-tracked types"
    )
    serial_number: str | None = None
    mac_address: str | None = None
    po_number: str | None = Field(default=None, description="Purchase order reference")
    location: str | None = None
    recorded_by: str | None = None
    registration_date: datetime | None = None


class UpdateAssetRequest(BaseModel):
    """Partial update of one unit. Only fields that are set are applied."""

    status: AssetStatus | None = None
    current_user: str | None = None
    location: str | None = None
    current_balance: float | None = Field(default=None, ge=0)
    initial_balance: float | None = Field(default=None, ge=0)
    serial_number: str | None = None
    mac_address: str | None = None
    category: str | None = None
    asset_type: str | None = None
    wo_ro_int_number: str | None = Field(
        default=None, description="Work order reference for the derived movement"
    )
    actor: str = Field(default="System", exclude=True)


class BatchUpdateAssetsRequest(BaseModel):
    """Apply one change to many units."""

    ids: list[str] = Field(..., min_length=1)
    status: AssetStatus | None = None
    current_user: str | None = None
    location: str | None = None
    log_action: str | None = Field(default=None, description="Audit action label")
    actor: str = "System"


class ApproveLoanRequest(BaseModel):
    """Approve a loan (or handover) of specific units to a holder."""

    unit_ids: list[str] = Field(..., min_length=1)
    holder: str = Field(..., min_length=1, description="Employee or customer receiving the units")
    location: str | None = None
    loan_id: str | None = Field(default=None, description="Loan request reference")
    actor: str = "System"


# --- Movements & stock levels ---


class RecordMovementRequest(BaseModel):
    """Manual stock card entry (adjustments, returns, handovers)."""

    asset_name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    type: MovementType
    quantity: float = Field(..., description="Magnitude; the type carries direction")
    date: datetime | None = Field(default=None, description="Defaults to now; may be back-dated")
    reference_id: str | None = None
    actor: str | None = None
    notes: str | None = None


class StockThresholdsRequest(BaseModel):
    """Low-stock thresholds keyed by ``"<item_name>|<brand>"``."""

    thresholds: dict[str, int] = Field(default_factory=dict)
