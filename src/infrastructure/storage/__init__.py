"""Storage infrastructure implementations."""

from src.infrastructure.storage.memory import InMemoryKeyValueStore
from src.infrastructure.storage.sqlite import (
    SQLiteKeyValueStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
