"""SQLite storage implementations."""

from matinv.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    database_write,
    get_connection,
    get_pool,
    get_transaction,
)
from matinv.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from matinv.infrastructure.storage.sqlite.stock_history_store import SQLiteStockHistoryStore
from matinv.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from matinv.infrastructure.storage.sqlite.user_role_store import SQLiteUserRoleStore
from matinv.infrastructure.storage.sqlite.warehouse_store import SQLiteWarehouseStore

# Aliases used by the application lifespan
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_material_store: SQLiteMaterialStore | None = None
_stock_history_store: SQLiteStockHistoryStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_warehouse_store: SQLiteWarehouseStore | None = None
_user_role_store: SQLiteUserRoleStore | None = None


async def get_material_store() -> SQLiteMaterialStore:
    """Get singleton material store instance."""
    global _material_store
    if _material_store is None:
        _material_store = SQLiteMaterialStore()
    return _material_store


async def get_stock_history_store() -> SQLiteStockHistoryStore:
    """Get singleton stock history store instance."""
    global _stock_history_store
    if _stock_history_store is None:
        _stock_history_store = SQLiteStockHistoryStore()
    return _stock_history_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_warehouse_store() -> SQLiteWarehouseStore:
    """Get singleton warehouse store instance."""
    global _warehouse_store
    if _warehouse_store is None:
        _warehouse_store = SQLiteWarehouseStore()
    return _warehouse_store


async def get_user_role_store() -> SQLiteUserRoleStore:
    """Get singleton user role store instance."""
    global _user_role_store
    if _user_role_store is None:
        _user_role_store = SQLiteUserRoleStore()
    return _user_role_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "database_write",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteMaterialStore",
    "SQLiteStockHistoryStore",
    "SQLiteSupplierStore",
    "SQLiteWarehouseStore",
    "SQLiteUserRoleStore",
    # Factory functions
    "get_material_store",
    "get_stock_history_store",
    "get_supplier_store",
    "get_warehouse_store",
    "get_user_role_store",
]
