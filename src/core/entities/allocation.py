"""Transient allocation inputs and outputs (never persisted)."""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.inventory import StockMovement


class ItemKind(str, Enum):
    MEASUREMENT = "measurement"
    COUNT = "count"


class ClassificationSource(str, Enum):
    METADATA = "metadata"
    LEDGER = "ledger"


class Classification(BaseModel):
    kind: ItemKind
    source: ClassificationSource
    unit: str | None = None

    @property
    def is_measurement(self) -> bool:
        return self.kind == ItemKind.MEASUREMENT


class AllocationRequest(BaseModel):
    """One requested material line, optionally pinned to a physical unit."""

    item_name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit: str | None = None
    material_asset_id: str | None = None


class ConsumptionContext(BaseModel):
    """Where the consumed stock went. Never validated beyond shape."""

    customer_id: str | None = None
    location: str | None = None
    doc_number: str | None = None
    actor: str = "System"


class AvailabilityResult(BaseModel):
    available: float
    is_sufficient: bool
    recommended_source_ids: list[str] = Field(default_factory=list)
    physical: int = 0  # eligible unit count
    is_measurement: bool = False
    # measurement only: total covers the need, no single unit does
    is_fragmented: bool = False


class ConsumptionResult(BaseModel):
    success: bool
    warnings: list[str] = Field(default_factory=list)
    updated_unit_ids: list[str] = Field(default_factory=list)
    movements: list[StockMovement] = Field(default_factory=list)
