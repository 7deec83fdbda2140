"""
SQLite implementation of material storage.

Status and shortage date are re-derived on every insert and update, so
stored rows always agree with their quantities and thresholds.
"""

from datetime import UTC, datetime

import aiosqlite

from matinv.config import get_logger
from matinv.core.entities.material import Material, StockStatus
from matinv.core.exceptions import (
    DuplicateMaterialCodeError,
    MaterialInUseError,
    MaterialNotFoundError,
)
from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.services.stock_status import refresh_derived_fields
from matinv.infrastructure.storage.sqlite.connection import database_write, get_connection
from matinv.infrastructure.storage.sqlite.rows import (
    format_datetime,
    generate_id,
    parse_datetime,
)

logger = get_logger(__name__)


class SQLiteMaterialStore(IMaterialStore):
    """SQLite implementation of material storage."""

    async def create_material(self, material: Material) -> Material:
        """Create a new material record."""
        now = datetime.now(UTC)
        material = refresh_derived_fields(
            material.model_copy(
                update={
                    "id": material.id or generate_id(),
                    "created_at": now,
                    "updated_at": now,
                }
            ),
            now,
        )
        async with database_write("create_material") as conn:
            try:
                await conn.execute(
                    """
                    INSERT INTO materials (
                        id, material_code, name, supplier_id, warehouse_id, unit,
                        current_quantity, reorder_point, safety_stock,
                        avg_daily_usage, lead_time_days, status, shortage_date,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        material.id,
                        material.material_code,
                        material.name,
                        material.supplier_id,
                        material.warehouse_id,
                        material.unit,
                        material.current_quantity,
                        material.reorder_point,
                        material.safety_stock,
                        material.avg_daily_usage,
                        material.lead_time_days,
                        material.status.value,
                        format_datetime(material.shortage_date),
                        material.created_at.isoformat(),
                        material.updated_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                if "material_code" in str(e):
                    raise DuplicateMaterialCodeError(material.material_code) from e
                raise
        logger.info(
            "material_created",
            material_id=material.id,
            material_code=material.material_code,
            status=material.status.value,
        )
        return material

    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM materials WHERE id = ?", (material_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def get_by_code(self, material_code: str) -> Material | None:
        """Get material by its unique code."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM materials WHERE material_code = ?", (material_code,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        statuses: list[StockStatus] | None = None,
        supplier_id: str | None = None,
        warehouse_id: str | None = None,
        search: str | None = None,
    ) -> list[Material]:
        """List materials ordered by code, with optional filters."""
        where, params = self._filters(statuses, supplier_id, warehouse_id, search)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM materials
                {where}
                ORDER BY material_code
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_material(row) for row in rows]

    async def count_materials(
        self,
        statuses: list[StockStatus] | None = None,
        supplier_id: str | None = None,
        warehouse_id: str | None = None,
        search: str | None = None,
    ) -> int:
        """Count materials matching the list filters."""
        where, params = self._filters(statuses, supplier_id, warehouse_id, search)
        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM materials {where}", params)
            (count,) = await cursor.fetchone()
            return count

    @staticmethod
    def _filters(
        statuses: list[StockStatus] | None,
        supplier_id: str | None,
        warehouse_id: str | None,
        search: str | None,
    ) -> tuple[str, list]:
        """Build the WHERE clause shared by list and count."""
        clauses: list[str] = []
        params: list = []
        if statuses:
            placeholders = ", ".join("?" for _ in statuses)
            clauses.append(f"status IN ({placeholders})")
            params.extend(StockStatus(s).value for s in statuses)
        if supplier_id:
            clauses.append("supplier_id = ?")
            params.append(supplier_id)
        if warehouse_id:
            clauses.append("warehouse_id = ?")
            params.append(warehouse_id)
        if search and search.strip():
            # LIKE is case-insensitive for ASCII; % and _ in the term match literally
            term = search.strip().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            clauses.append(
                "(material_code LIKE ? ESCAPE '\\' OR name LIKE ? ESCAPE '\\')"
            )
            params.extend([f"%{term}%", f"%{term}%"])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    async def update_material(self, material: Material) -> Material:
        """
        Update material metadata and thresholds.

        The stored quantity is authoritative: whatever `current_quantity`
        the caller holds is replaced before status is derived.
        """
        now = datetime.now(UTC)
        async with database_write("update_material", immediate=True) as conn:
            cursor = await conn.execute(
                "SELECT current_quantity FROM materials WHERE id = ?", (material.id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise MaterialNotFoundError(material.id or "")

            material = refresh_derived_fields(
                material.model_copy(
                    update={
                        "current_quantity": float(row["current_quantity"]),
                        "updated_at": now,
                    }
                ),
                now,
            )
            try:
                await conn.execute(
                    """
                    UPDATE materials SET
                        material_code = ?, name = ?, supplier_id = ?,
                        warehouse_id = ?, unit = ?, reorder_point = ?,
                        safety_stock = ?, avg_daily_usage = ?,
                        lead_time_days = ?, status = ?, shortage_date = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        material.material_code,
                        material.name,
                        material.supplier_id,
                        material.warehouse_id,
                        material.unit,
                        material.reorder_point,
                        material.safety_stock,
                        material.avg_daily_usage,
                        material.lead_time_days,
                        material.status.value,
                        format_datetime(material.shortage_date),
                        material.updated_at.isoformat(),
                        material.id,
                    ),
                )
            except aiosqlite.IntegrityError as e:
                if "material_code" in str(e):
                    raise DuplicateMaterialCodeError(material.material_code) from e
                raise
        logger.info(
            "material_updated",
            material_id=material.id,
            status=material.status.value,
        )
        return material

    async def delete_material(self, material_id: str) -> bool:
        """Delete a material that has no stock history."""
        async with database_write("delete_material", immediate=True) as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM stock_history WHERE material_id = ?",
                (material_id,),
            )
            (history_entries,) = await cursor.fetchone()
            if history_entries:
                raise MaterialInUseError(material_id, history_entries)

            cursor = await conn.execute(
                "DELETE FROM materials WHERE id = ?", (material_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("material_deleted", material_id=material_id)
        return deleted

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> Material:
        """Convert database row to Material entity."""
        return Material(
            id=row["id"],
            material_code=row["material_code"],
            name=row["name"],
            supplier_id=row["supplier_id"],
            warehouse_id=row["warehouse_id"],
            unit=row["unit"],
            current_quantity=float(row["current_quantity"]),
            reorder_point=float(row["reorder_point"]),
            safety_stock=float(row["safety_stock"]),
            avg_daily_usage=float(row["avg_daily_usage"]),
            lead_time_days=int(row["lead_time_days"]),
            status=StockStatus(row["status"]),
            shortage_date=parse_datetime(row["shortage_date"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
