"""SQLite implementation of warehouse storage."""

from datetime import UTC, datetime

import aiosqlite

from matinv.config import get_logger
from matinv.core.entities.supplier import Warehouse
from matinv.core.exceptions import WarehouseNotFoundError
from matinv.core.interfaces.reference_store import IWarehouseStore
from matinv.infrastructure.storage.sqlite.connection import database_write, get_connection
from matinv.infrastructure.storage.sqlite.rows import (
    format_datetime,
    generate_id,
    parse_datetime,
)

logger = get_logger(__name__)


class SQLiteWarehouseStore(IWarehouseStore):
    """SQLite implementation of warehouse storage."""

    async def create_warehouse(self, warehouse: Warehouse) -> Warehouse:
        """Create a new warehouse."""
        now = datetime.now(UTC)
        warehouse = warehouse.model_copy(
            update={"id": warehouse.id or generate_id(), "created_at": now, "updated_at": now}
        )
        async with database_write("create_warehouse") as conn:
            await conn.execute(
                """
                INSERT INTO warehouses (id, name, location, capacity, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    warehouse.id,
                    warehouse.name,
                    warehouse.location,
                    warehouse.capacity,
                    format_datetime(warehouse.created_at),
                    format_datetime(warehouse.updated_at),
                ),
            )
        logger.info("warehouse_created", warehouse_id=warehouse.id, name=warehouse.name)
        return warehouse

    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        """Get warehouse by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM warehouses WHERE id = ?", (warehouse_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_warehouse(row) if row else None

    async def list_warehouses(self, limit: int = 100, offset: int = 0) -> list[Warehouse]:
        """List warehouses ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM warehouses ORDER BY name LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_warehouse(row) for row in rows]

    async def update_warehouse(self, warehouse: Warehouse) -> Warehouse:
        """Update a warehouse."""
        warehouse = warehouse.model_copy(update={"updated_at": datetime.now(UTC)})
        async with database_write("update_warehouse") as conn:
            cursor = await conn.execute(
                """
                UPDATE warehouses SET name = ?, location = ?, capacity = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    warehouse.name,
                    warehouse.location,
                    warehouse.capacity,
                    format_datetime(warehouse.updated_at),
                    warehouse.id,
                ),
            )
            if cursor.rowcount == 0:
                raise WarehouseNotFoundError(warehouse.id or "")
        logger.info("warehouse_updated", warehouse_id=warehouse.id)
        return warehouse

    async def delete_warehouse(self, warehouse_id: str) -> bool:
        """Delete a warehouse; its materials keep existing without one."""
        async with database_write("delete_warehouse") as conn:
            cursor = await conn.execute(
                "DELETE FROM warehouses WHERE id = ?", (warehouse_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("warehouse_deleted", warehouse_id=warehouse_id)
        return deleted

    @staticmethod
    def _row_to_warehouse(row: aiosqlite.Row) -> Warehouse:
        return Warehouse(
            id=row["id"],
            name=row["name"],
            location=row["location"],
            capacity=float(row["capacity"]) if row["capacity"] is not None else None,
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
