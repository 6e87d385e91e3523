"""Entity -> response DTO conversion shared by the inventory use cases."""

from src.application.dto.responses import (
    ActivityLogEntryResponse,
    InventoryUnitResponse,
    StockMovementResponse,
)
from src.core.entities.inventory import InventoryUnit, StockMovement


def unit_to_response(unit: InventoryUnit) -> InventoryUnitResponse:
    return InventoryUnitResponse(
        id=unit.id,
        item_name=unit.item_name,
        brand=unit.brand,
        category=unit.category,
        asset_type=unit.asset_type,
        status=unit.status.value,
        is_measurement=unit.is_measurement,
        initial_balance=unit.initial_balance,
        current_balance=unit.current_balance,
        current_user=unit.current_user,
        location=unit.location,
        serial_number=unit.serial_number,
        mac_address=unit.mac_address,
        po_number=unit.po_number,
        recorded_by=unit.recorded_by,
        registration_date=unit.registration_date,
        activity_log=[
            ActivityLogEntryResponse(
                id=entry.id,
                timestamp=entry.timestamp,
                user=entry.user,
                action=entry.action,
                details=entry.details,
            )
            for entry in unit.activity_log
        ],
    )


def movement_to_response(movement: StockMovement) -> StockMovementResponse:
    return StockMovementResponse(
        id=movement.id,
        asset_name=movement.asset_name,
        brand=movement.brand,
        date=movement.date,
        type=movement.type.value,
        quantity=movement.quantity,
        balance_after=movement.balance_after,
        reference_id=movement.reference_id,
        actor=movement.actor,
        notes=movement.notes,
    )
