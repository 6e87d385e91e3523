"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers that mutate stock.
"""

from src.application.services import get_inventory_service, reset_services
from src.application.use_cases import (
    ApproveLoanUseCase,
    BatchUpdateAssetsUseCase,
    ConsumeMaterialsUseCase,
    GetStockAlertsUseCase,
    RegisterAssetUseCase,
    UpdateAssetUseCase,
)

__all__ = [
    # Use Cases
    "ConsumeMaterialsUseCase",
    "RegisterAssetUseCase",
    "UpdateAssetUseCase",
    "BatchUpdateAssetsUseCase",
    "ApproveLoanUseCase",
    "GetStockAlertsUseCase",
    # Service factories
    "get_inventory_service",
    "reset_services",
]
