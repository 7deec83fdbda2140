"""Storage infrastructure implementations."""

from matinv.infrastructure.storage.sqlite import (
    SQLiteMaterialStore,
    SQLiteStockHistoryStore,
    SQLiteSupplierStore,
    SQLiteUserRoleStore,
    SQLiteWarehouseStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteMaterialStore",
    "SQLiteStockHistoryStore",
    "SQLiteSupplierStore",
    "SQLiteWarehouseStore",
    "SQLiteUserRoleStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
