"""
Async SQLite connection pool with aiosqlite.

Connections run in autocommit mode; write transactions are opened
explicitly with ``BEGIN IMMEDIATE`` so a whole-collection save either
lands completely or not at all.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)


class ConnectionPool:
    """Fixed-size pool of aiosqlite connections to one database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        async with self._lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._create_connection()
                self._connections.append(conn)
                await self._pool.put(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _create_connection(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection for reads.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            yield conn
        finally:
            await self._pool.put(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside a write transaction.

        BEGIN, the caller's statements and COMMIT share one guard. Any exit
        by exception, task cancellation included, rolls back whatever the
        connection's worker thread has opened, so a timed-out save leaves
        neither a partial write nor an open transaction in the pool. A
        connection that cannot be rolled back is replaced.
        """
        if not self._initialized:
            await self.initialize()

        conn = await self._pool.get()
        try:
            await conn.execute("BEGIN IMMEDIATE")
            yield conn
            await self._commit(conn)
        except BaseException:
            if not await self._rollback(conn):
                conn = await self._replace(conn)
            raise
        finally:
            self._pool.put_nowait(conn)

    @staticmethod
    async def _finish(task: asyncio.Future) -> bool:
        """Wait for ``task`` through any cancellation; True if one arrived."""
        cancelled = False
        while not task.done():
            try:
                await asyncio.wait([task])
            except asyncio.CancelledError:
                cancelled = True
        return cancelled

    async def _commit(self, conn: aiosqlite.Connection) -> None:
        """
        COMMIT, run to completion even if the task is cancelled meanwhile.

        Once COMMIT is queued on the worker thread the write lands, so a
        cancellation arriving now is absorbed and the save reported done.
        """
        commit = asyncio.ensure_future(conn.commit())
        if await self._finish(commit):
            logger.warning("transaction_committed_despite_cancel", db_path=str(self.db_path))
        commit.result()

    async def _rollback(self, conn: aiosqlite.Connection) -> bool:
        """
        ROLLBACK shielded from cancellation. False if the connection is unusable.

        Issued unconditionally: a BEGIN still queued on the worker thread
        when the caller was cancelled opens its transaction before this
        statement runs, and sqlite3 skips the ROLLBACK when none is open.
        """
        rollback = asyncio.ensure_future(conn.rollback())
        cancelled = await self._finish(rollback)
        try:
            rollback.result()
        except (aiosqlite.Error, ValueError) as e:
            logger.error("transaction_rollback_failed", db_path=str(self.db_path), error=str(e))
            return False
        if cancelled:
            raise asyncio.CancelledError
        return True

    async def _replace(self, conn: aiosqlite.Connection) -> aiosqlite.Connection:
        """Close a broken connection and put a fresh one in its place."""
        try:
            await conn.close()
        except (aiosqlite.Error, ValueError) as e:
            logger.warning("broken_connection_close_failed", error=str(e))

        fresh = await self._create_connection()
        self._connections = [c for c in self._connections if c is not conn]
        self._connections.append(fresh)
        logger.warning("connection_replaced", db_path=str(self.db_path))
        return fresh

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._pool = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
            logger.info("connection_pool_closed")


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    """Close the global connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
