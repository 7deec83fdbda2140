"""
SQLite implementation of the stock ledger.

An adjustment is committed as one IMMEDIATE transaction: the material
quantity is updated only if it still holds the value the adjustment was
computed from, then the history row is inserted. Either both writes land
or neither does.
"""

import aiosqlite

from matinv.config import get_logger
from matinv.core.entities.material import Material
from matinv.core.entities.stock_history import (
    StockHistoryEntry,
    StockHistoryRecord,
    UpdateReason,
)
from matinv.core.exceptions import (
    ConcurrentAdjustmentError,
    DatabaseError,
    MaterialNotFoundError,
)
from matinv.core.interfaces.stock_history_store import IStockHistoryStore
from matinv.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from matinv.infrastructure.storage.sqlite.rows import (
    format_datetime,
    generate_id,
    parse_datetime,
)

logger = get_logger(__name__)


class SQLiteStockHistoryStore(IStockHistoryStore):
    """SQLite implementation of the append-only stock ledger."""

    async def commit_adjustment(
        self, material: Material, entry: StockHistoryEntry
    ) -> tuple[Material, StockHistoryEntry]:
        """Persist the adjusted material and its ledger entry atomically."""
        if entry.id is None:
            entry = entry.model_copy(update={"id": generate_id()})

        try:
            async with get_transaction(immediate=True) as conn:
                cursor = await conn.execute(
                    """
                    UPDATE materials SET
                        current_quantity = ?, status = ?, shortage_date = ?,
                        updated_at = ?
                    WHERE id = ? AND current_quantity = ?
                    """,
                    (
                        material.current_quantity,
                        material.status.value,
                        format_datetime(material.shortage_date),
                        format_datetime(material.updated_at),
                        entry.material_id,
                        entry.quantity_before,
                    ),
                )
                if cursor.rowcount == 0:
                    cursor = await conn.execute(
                        "SELECT 1 FROM materials WHERE id = ?", (entry.material_id,)
                    )
                    if await cursor.fetchone() is None:
                        raise MaterialNotFoundError(entry.material_id)
                    raise ConcurrentAdjustmentError(
                        entry.material_id, entry.quantity_before
                    )

                await conn.execute(
                    """
                    INSERT INTO stock_history (
                        id, material_id, user_id, quantity_before,
                        quantity_after, quantity_change, reason, notes,
                        created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        entry.id,
                        entry.material_id,
                        entry.user_id,
                        entry.quantity_before,
                        entry.quantity_after,
                        entry.quantity_change,
                        entry.reason.value,
                        entry.notes,
                        format_datetime(entry.created_at),
                    ),
                )
        except aiosqlite.Error as e:
            logger.error(
                "adjustment_commit_failed",
                material_id=entry.material_id,
                error=str(e),
            )
            raise DatabaseError("commit_adjustment", str(e)) from e

        logger.info(
            "stock_adjusted",
            material_id=entry.material_id,
            entry_id=entry.id,
            user_id=entry.user_id,
            quantity_before=entry.quantity_before,
            quantity_after=entry.quantity_after,
            reason=entry.reason.value,
        )
        return material, entry

    async def list_history(
        self,
        limit: int = 20,
        offset: int = 0,
        material_id: str | None = None,
    ) -> list[StockHistoryRecord]:
        """List ledger entries with their material, newest first."""
        where = "WHERE h.material_id = ?" if material_id else ""
        params: tuple = (material_id,) if material_id else ()
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT h.*, m.material_code, m.name AS material_name, m.unit
                FROM stock_history h
                JOIN materials m ON m.id = h.material_id
                {where}
                ORDER BY h.created_at DESC, h.rowid DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def count_for_material(self, material_id: str) -> int:
        """Number of ledger entries for a material."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM stock_history WHERE material_id = ?",
                (material_id,),
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> StockHistoryRecord:
        """Convert a joined row to a StockHistoryRecord."""
        entry = StockHistoryEntry(
            id=row["id"],
            material_id=row["material_id"],
            user_id=row["user_id"],
            quantity_before=float(row["quantity_before"]),
            quantity_after=float(row["quantity_after"]),
            quantity_change=float(row["quantity_change"]),
            reason=UpdateReason(row["reason"]),
            notes=row["notes"],
            created_at=parse_datetime(row["created_at"]),
        )
        return StockHistoryRecord(
            entry=entry,
            material_code=row["material_code"],
            material_name=row["material_name"],
            unit=row["unit"],
        )
