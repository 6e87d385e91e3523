"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.catalog_provider import ICatalogProvider
from src.core.interfaces.key_value_store import (
    ASSET_CATEGORIES,
    INVENTORY_UNITS,
    STOCK_MOVEMENTS,
    STOCK_THRESHOLDS,
    IKeyValueStore,
)
from src.core.interfaces.notifier import INotifier

__all__ = [
    # Storage interfaces
    "IKeyValueStore",
    "INVENTORY_UNITS",
    "STOCK_MOVEMENTS",
    "ASSET_CATEGORIES",
    "STOCK_THRESHOLDS",
    # Metadata interfaces
    "ICatalogProvider",
    # Notification interfaces
    "INotifier",
]
