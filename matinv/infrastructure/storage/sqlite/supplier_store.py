"""SQLite implementation of supplier storage."""

from datetime import UTC, datetime

import aiosqlite

from matinv.config import get_logger
from matinv.core.entities.supplier import Supplier
from matinv.core.exceptions import SupplierNotFoundError
from matinv.core.interfaces.reference_store import ISupplierStore
from matinv.infrastructure.storage.sqlite.connection import database_write, get_connection
from matinv.infrastructure.storage.sqlite.rows import (
    format_datetime,
    generate_id,
    parse_datetime,
)

logger = get_logger(__name__)


class SQLiteSupplierStore(ISupplierStore):
    """SQLite implementation of supplier storage."""

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a new supplier."""
        now = datetime.now(UTC)
        supplier = supplier.model_copy(
            update={"id": supplier.id or generate_id(), "created_at": now, "updated_at": now}
        )
        async with database_write("create_supplier") as conn:
            await conn.execute(
                """
                INSERT INTO suppliers (
                    id, name, contact_person, email, phone, address, rating,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    supplier.id,
                    supplier.name,
                    supplier.contact_person,
                    supplier.email,
                    supplier.phone,
                    supplier.address,
                    supplier.rating,
                    format_datetime(supplier.created_at),
                    format_datetime(supplier.updated_at),
                ),
            )
        logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
        return supplier

    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        """Get supplier by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers WHERE id = ?", (supplier_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_supplier(row) if row else None

    async def list_suppliers(self, limit: int = 100, offset: int = 0) -> list[Supplier]:
        """List suppliers ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers ORDER BY name LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    async def get_suppliers(self, supplier_ids: list[str]) -> dict[str, Supplier]:
        """Fetch several suppliers keyed by ID."""
        ids = sorted(set(supplier_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM suppliers WHERE id IN ({placeholders})", ids
            )
            rows = await cursor.fetchall()
            return {row["id"]: self._row_to_supplier(row) for row in rows}

    async def update_supplier(self, supplier: Supplier) -> Supplier:
        """Update a supplier."""
        supplier = supplier.model_copy(update={"updated_at": datetime.now(UTC)})
        async with database_write("update_supplier") as conn:
            cursor = await conn.execute(
                """
                UPDATE suppliers SET
                    name = ?, contact_person = ?, email = ?, phone = ?,
                    address = ?, rating = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    supplier.name,
                    supplier.contact_person,
                    supplier.email,
                    supplier.phone,
                    supplier.address,
                    supplier.rating,
                    format_datetime(supplier.updated_at),
                    supplier.id,
                ),
            )
            if cursor.rowcount == 0:
                raise SupplierNotFoundError(supplier.id or "")
        logger.info("supplier_updated", supplier_id=supplier.id)
        return supplier

    async def delete_supplier(self, supplier_id: str) -> bool:
        """Delete a supplier; its materials keep existing without one."""
        async with database_write("delete_supplier") as conn:
            cursor = await conn.execute(
                "DELETE FROM suppliers WHERE id = ?", (supplier_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("supplier_deleted", supplier_id=supplier_id)
        return deleted

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            contact_person=row["contact_person"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            rating=float(row["rating"]),
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
        )
