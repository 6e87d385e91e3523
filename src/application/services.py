"""
Service factory functions for dependency injection.

This module wires infrastructure implementations to core services.
Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.config import get_logger, get_settings
from src.core.services import InventoryService

if TYPE_CHECKING:
    from src.core.interfaces import ICatalogProvider, IKeyValueStore, INotifier

logger = get_logger(__name__)

# Singleton service instance; the service owns the write lock, so there
# must be exactly one per process.
_inventory_service: InventoryService | None = None


def create_store() -> "IKeyValueStore":
    """Build the key-value store selected by ``STORAGE_BACKEND``."""
    from src.infrastructure.storage import InMemoryKeyValueStore, SQLiteKeyValueStore

    backend = get_settings().storage.backend
    if backend == "memory":
        return InMemoryKeyValueStore()
    return SQLiteKeyValueStore()


def get_inventory_service(
    store: "IKeyValueStore | None" = None,
    catalog: "ICatalogProvider | None" = None,
    notifier: "INotifier | None" = None,
) -> InventoryService:
    """
    Get or create the InventoryService.

    Creates infrastructure dependencies if not provided. Passing a store
    builds a fresh, uncached service around it.

    Args:
        store: Optional key-value store override
        catalog: Optional category/type metadata override
        notifier: Optional notification hook override

    Returns:
        Configured InventoryService
    """
    global _inventory_service

    if _inventory_service is not None and store is None:
        return _inventory_service

    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.catalog import KeyValueCatalogProvider
    from src.infrastructure.notifications import LoggingNotifier

    settings = get_settings()
    kv_store = store or create_store()
    service = InventoryService(
        store=kv_store,
        catalog=catalog or KeyValueCatalogProvider(kv_store, settings.inventory),
        notifier=notifier or LoggingNotifier(),
        settings=settings.inventory,
    )

    if store is None:
        _inventory_service = service
        logger.info("inventory_service_created", backend=settings.storage.backend)

    return service


def reset_services() -> None:
    """Reset all singleton services (for testing)."""
    global _inventory_service
    _inventory_service = None
