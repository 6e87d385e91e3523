"""
Dependency injection container for FastAPI.

Provides service instances to route handlers.
"""

from functools import lru_cache

from fastapi import Depends

from src.application.services import get_inventory_service
from src.application.use_cases import (
    ApproveLoanUseCase,
    BatchUpdateAssetsUseCase,
    ConsumeMaterialsUseCase,
    GetStockAlertsUseCase,
    RegisterAssetUseCase,
    UpdateAssetUseCase,
)
from src.config import Settings, get_settings
from src.core.services import InventoryService


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
def get_inventory() -> InventoryService:
    """Get the process-wide inventory service."""
    return get_inventory_service()


# Use case dependencies; overriding get_inventory rewires all of them
def get_consume_materials_use_case(
    service: InventoryService = Depends(get_inventory),
) -> ConsumeMaterialsUseCase:
    return ConsumeMaterialsUseCase(service)


def get_register_asset_use_case(
    service: InventoryService = Depends(get_inventory),
) -> RegisterAssetUseCase:
    return RegisterAssetUseCase(service)


def get_update_asset_use_case(
    service: InventoryService = Depends(get_inventory),
) -> UpdateAssetUseCase:
    return UpdateAssetUseCase(service)


def get_batch_update_use_case(
    service: InventoryService = Depends(get_inventory),
) -> BatchUpdateAssetsUseCase:
    return BatchUpdateAssetsUseCase(service)


def get_approve_loan_use_case(
    service: InventoryService = Depends(get_inventory),
) -> ApproveLoanUseCase:
    return ApproveLoanUseCase(service)


def get_stock_alerts_use_case(
    service: InventoryService = Depends(get_inventory),
) -> GetStockAlertsUseCase:
    return GetStockAlertsUseCase(service)
