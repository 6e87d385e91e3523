"""Inventory domain entities."""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(UTC)


def _as_aware(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so mixed inputs stay comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def identity_key(item_name: str, brand: str, normalize: bool = True) -> tuple[str, str]:
    """
    Join key shared by ledger units, requests and movement groups.

    With ``normalize`` the parts are trimmed, whitespace-collapsed and
    casefolded; stored values keep their original spelling.
    """
    if not normalize:
        return (item_name, brand)
    return (
        " ".join(item_name.split()).casefold(),
        " ".join(brand.split()).casefold(),
    )


class AssetStatus(str, Enum):
    """Lifecycle states of an inventory unit."""

    IN_STORAGE = "in_storage"
    IN_USE = "in_use"
    IN_CUSTODY = "in_custody"
    DAMAGED = "damaged"
    UNDER_REPAIR = "under_repair"
    OUT_FOR_REPAIR = "out_for_repair"
    DECOMMISSIONED = "decommissioned"
    CONSUMED = "consumed"
    AWAITING_RETURN = "awaiting_return"


class MovementType(str, Enum):
    """Stock card entry types. The IN_/OUT_ prefix carries the sign."""

    IN_PURCHASE = "IN_PURCHASE"
    IN_RETURN = "IN_RETURN"
    IN_ADJUSTMENT = "IN_ADJUSTMENT"
    OUT_INSTALLATION = "OUT_INSTALLATION"
    OUT_BROKEN = "OUT_BROKEN"
    OUT_HANDOVER = "OUT_HANDOVER"
    OUT_ADJUSTMENT = "OUT_ADJUSTMENT"

    @property
    def is_inbound(self) -> bool:
        return self.value.startswith("IN_")


class ActivityLogEntry(BaseModel):
    """One audit trail line on a unit."""

    id: str = Field(default_factory=lambda: f"log-{uuid4().hex[:12]}")
    timestamp: datetime = Field(default_factory=utcnow)
    user: str = "System"
    action: str
    details: str = ""


class InventoryUnit(BaseModel):
    """
    A physical or logical stock record.

    Measurement units (cable drums and the like) carry ``initial_balance``
    and a decreasing ``current_balance``; count units carry neither and
    always represent a quantity of one.
    """

    id: str
    item_name: str
    brand: str
    category: str | None = None
    asset_type: str | None = None
    status: AssetStatus = AssetStatus.IN_STORAGE
    initial_balance: float | None = Field(default=None, ge=0)
    current_balance: float | None = Field(default=None, ge=0)
    current_user: str | None = None
    location: str | None = None
    serial_number: str | None = None
    mac_address: str | None = None
    po_number: str | None = None
    recorded_by: str | None = None
    registration_date: datetime = Field(default_factory=utcnow)
    activity_log: list[ActivityLogEntry] = Field(default_factory=list)

    @field_validator("registration_date")
    @classmethod
    def _aware_registration(cls, v: datetime) -> datetime:
        return _as_aware(v)

    @property
    def is_measurement(self) -> bool:
        return self.initial_balance is not None

    @property
    def available_balance(self) -> float:
        """Remaining measured quantity, falling back to the initial balance."""
        if self.current_balance is not None:
            return self.current_balance
        return self.initial_balance or 0.0


class StockMovementDraft(BaseModel):
    """A movement as submitted by callers, before id and running balance."""

    asset_name: str
    brand: str
    date: datetime = Field(default_factory=utcnow)
    type: MovementType
    quantity: float  # sign ignored, the type carries direction
    reference_id: str | None = None
    actor: str | None = None
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def _aware_date(cls, v: datetime) -> datetime:
        return _as_aware(v)


class StockMovement(StockMovementDraft):
    """A recorded stock card entry with its running group balance."""

    id: str
    quantity: float = Field(ge=0)
    balance_after: float = 0.0
