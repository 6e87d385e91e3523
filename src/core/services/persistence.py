"""Persistence helpers shared by the ledger and the movement log."""

import asyncio
from typing import Any

from src.config import get_logger
from src.core.exceptions import PersistenceTimeoutError
from src.core.interfaces.key_value_store import IKeyValueStore

logger = get_logger(__name__)


async def save_collection(
    store: IKeyValueStore,
    collection_key: str,
    items: list[dict[str, Any]],
    timeout: float | None = None,
) -> list[dict[str, Any]]:
    """
    Save a whole collection, optionally bounded by a timeout.

    The store must roll back its own write when cancelled, so a timeout
    leaves the previously saved collection in place.
    """
    if timeout is None:
        return await store.save(collection_key, items)

    try:
        return await asyncio.wait_for(store.save(collection_key, items), timeout)
    except asyncio.TimeoutError as e:
        logger.error(
            "collection_save_timeout",
            collection=collection_key,
            timeout=timeout,
        )
        raise PersistenceTimeoutError(collection_key, timeout) from e
