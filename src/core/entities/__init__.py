"""Core domain entities."""

from src.core.entities.allocation import (
    AllocationRequest,
    AvailabilityResult,
    Classification,
    ClassificationSource,
    ConsumptionContext,
    ConsumptionResult,
    ItemKind,
)
from src.core.entities.catalog import (
    AssetCategory,
    AssetType,
    BulkType,
    ModelInfo,
    StandardItem,
    TrackingMethod,
)
from src.core.entities.inventory import (
    ActivityLogEntry,
    AssetStatus,
    InventoryUnit,
    MovementType,
    StockMovement,
    StockMovementDraft,
    identity_key,
)

__all__ = [
    # Inventory entities
    "ActivityLogEntry",
    "AssetStatus",
    "InventoryUnit",
    "MovementType",
    "StockMovement",
    "StockMovementDraft",
    "identity_key",
    # Catalog entities
    "AssetCategory",
    "AssetType",
    "BulkType",
    "ModelInfo",
    "StandardItem",
    "TrackingMethod",
    # Allocation entities
    "AllocationRequest",
    "AvailabilityResult",
    "Classification",
    "ClassificationSource",
    "ConsumptionContext",
    "ConsumptionResult",
    "ItemKind",
]
