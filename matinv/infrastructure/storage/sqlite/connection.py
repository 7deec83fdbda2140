"""
Pooled aiosqlite connections for the inventory stores.

Stock adjustments read a quantity and write it back conditionally, so the
pool can open transactions that take SQLite's write lock at BEGIN. A
connection only goes back to the pool once it is outside any transaction.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from matinv.config import get_logger, get_settings
from matinv.core.exceptions import DatabaseError

logger = get_logger(__name__)

CONNECTION_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    # ON DELETE SET NULL on supplier/warehouse references depends on this
    "PRAGMA foreign_keys=ON",
)


async def open_connection(db_path: Path, busy_timeout: int) -> aiosqlite.Connection:
    """Open a connection configured the way every store expects."""
    conn = await aiosqlite.connect(db_path)
    for pragma in CONNECTION_PRAGMAS:
        await conn.execute(pragma)
    await conn.execute(f"PRAGMA busy_timeout={int(busy_timeout)}")
    conn.row_factory = aiosqlite.Row
    return conn


class ConnectionPool:
    """Fixed-size pool of connections to one database file, opened on first use."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._open = False
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def available(self) -> int:
        """Connections not currently lent out."""
        return self._idle.qsize()

    async def initialize(self) -> None:
        async with self._lock:
            if self._open:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await open_connection(self.db_path, self.busy_timeout)
                self._connections.append(conn)
                self._idle.put_nowait(conn)

            self._open = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _release(self, conn: aiosqlite.Connection) -> None:
        if conn.in_transaction:
            # Left open by a caller that was cancelled mid-write
            logger.warning("connection_released_in_transaction", db_path=str(self.db_path))
            await conn.rollback()
        self._idle.put_nowait(conn)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection, waiting if all of them are lent out.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._open:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            await self._release(conn)

    @asynccontextmanager
    async def transaction(self, immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside an explicit transaction.

        Commits when the block exits normally and rolls back otherwise. With
        `immediate=True` the write lock is taken at BEGIN, so two adjustments
        of the same material queue up instead of one failing at commit.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            try:
                yield conn
                await conn.commit()
            except BaseException:
                await conn.rollback()
                raise

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue(maxsize=self.pool_size)
            self._open = False
            logger.info("connection_pool_closed", db_path=str(self.db_path))


# Process-wide pool, configured from settings.storage
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
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
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Borrow a connection from the process-wide pool."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction(immediate: bool = False) -> AsyncIterator[aiosqlite.Connection]:
    """Run a block in a transaction on the process-wide pool."""
    pool = await get_pool()
    async with pool.transaction(immediate=immediate) as conn:
        yield conn


@asynccontextmanager
async def database_write(
    operation: str, immediate: bool = False
) -> AsyncIterator[aiosqlite.Connection]:
    """
    get_transaction for store writes.

    Driver errors (constraint violations, locked database, I/O) are rolled
    back and re-raised as DatabaseError naming `operation`. Domain errors
    raised inside the block pass through unchanged.
    """
    try:
        async with get_transaction(immediate=immediate) as conn:
            yield conn
    except aiosqlite.Error as e:
        logger.error("database_write_failed", operation=operation, error=str(e))
        raise DatabaseError(operation, str(e)) from e
