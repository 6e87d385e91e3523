"""Category / type / model metadata entities."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class TrackingMethod(str, Enum):
    BULK = "bulk"
    INDIVIDUAL = "individual"


class BulkType(str, Enum):
    MEASUREMENT = "measurement"
    COUNT = "count"


class StandardItem(BaseModel):
    """A model (item name + brand) registered under an asset type."""

    id: int | None = None
    name: str
    brand: str
    bulk_type: BulkType | None = None
    unit_of_measure: str | None = None
    base_unit_of_measure: str | None = None


class AssetType(BaseModel):
    id: int | None = None
    name: str
    classification: str | None = None  # "asset" or "material"
    tracking_method: TrackingMethod = TrackingMethod.INDIVIDUAL
    unit_of_measure: str | None = None
    base_unit_of_measure: str | None = None
    quantity_per_unit: float | None = None
    standard_items: list[StandardItem] = Field(default_factory=list)


class AssetCategory(BaseModel):
    id: int | None = None
    name: str
    is_customer_installable: bool = False
    types: list[AssetType] = Field(default_factory=list)


@dataclass
class ModelInfo:
    """Resolved metadata for one (item_name, brand) model."""

    item: StandardItem
    asset_type: AssetType
    category: AssetCategory

    @property
    def is_measurement(self) -> bool:
        return self.item.bulk_type == BulkType.MEASUREMENT

    @property
    def tracking_method(self) -> TrackingMethod:
        return self.asset_type.tracking_method

    @property
    def unit(self) -> str:
        """Unit quantities of this model are expressed in."""
        if self.is_measurement:
            return (
                self.item.base_unit_of_measure
                or self.asset_type.unit_of_measure
                or "Meter"
            )
        return self.item.unit_of_measure or self.asset_type.unit_of_measure or "Pcs"
