"""Infrastructure layer implementations."""

from src.infrastructure import storage
from src.infrastructure.catalog import KeyValueCatalogProvider
from src.infrastructure.notifications import LoggingNotifier

__all__ = ["storage", "KeyValueCatalogProvider", "LoggingNotifier"]
