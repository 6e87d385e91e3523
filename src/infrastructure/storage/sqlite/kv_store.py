"""SQLite implementation of the whole-collection key-value store."""

import json
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.exceptions import DatabaseError
from src.core.interfaces.key_value_store import IKeyValueStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteKeyValueStore(IKeyValueStore):
    """
    Stores each collection as one JSON array row in ``collections``.

    A save is a single upsert inside one transaction, so readers see
    either the old collection or the new one.
    """

    async def load(self, collection_key: str) -> list[dict[str, Any]]:
        try:
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT payload FROM collections WHERE key = ?",
                    (collection_key,),
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError(f"load {collection_key}", str(e)) from e

        if row is None:
            return []
        return json.loads(row["payload"])

    async def save(
        self, collection_key: str, items: list[dict[str, Any]]
    ) -> list[dict[str, Any]]:
        payload = json.dumps(items, default=str)
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO collections (key, payload, item_count, updated_at)
                    VALUES (?, ?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET
                        payload = excluded.payload,
                        item_count = excluded.item_count,
                        updated_at = excluded.updated_at
                    """,
                    (collection_key, payload, len(items)),
                )
        except aiosqlite.Error as e:
            raise DatabaseError(f"save {collection_key}", str(e)) from e

        logger.debug("collection_saved", collection=collection_key, items=len(items))
        return items
