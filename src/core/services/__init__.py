"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.availability import AvailabilityResolver
from src.core.services.batch_mutator import BatchStatusMutator
from src.core.services.consumption_engine import ConsumptionEngine, ConsumptionPlan
from src.core.services.inventory_ledger import InventoryLedger
from src.core.services.inventory_service import InventoryService, infer_status_movement
from src.core.services.item_classifier import ItemClassifier
from src.core.services.movement_log import StockMovementLog, recompute_group
from src.core.services.stock_analysis import (
    RestockSuggestion,
    StockAlerts,
    StockAnalyzer,
    StockLevel,
)

__all__ = [
    # Ledger
    "InventoryLedger",
    # Movement log
    "StockMovementLog",
    "recompute_group",
    # Allocation
    "AvailabilityResolver",
    "ItemClassifier",
    "ConsumptionEngine",
    "ConsumptionPlan",
    "BatchStatusMutator",
    # Facade
    "InventoryService",
    "infer_status_movement",
    # Stock analysis
    "StockAnalyzer",
    "StockAlerts",
    "StockLevel",
    "RestockSuggestion",
]
