"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.kv_store import SQLiteKeyValueStore

# Aliases used by the application lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_connection_pool",
    "close_connection_pool",
    # Store
    "SQLiteKeyValueStore",
]
