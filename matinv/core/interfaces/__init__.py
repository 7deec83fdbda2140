"""Core interfaces (ports) for dependency injection."""

from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.interfaces.reference_store import (
    ISupplierStore,
    IUserRoleStore,
    IWarehouseStore,
)
from matinv.core.interfaces.stock_history_store import IStockHistoryStore

__all__ = [
    "IMaterialStore",
    "IStockHistoryStore",
    "ISupplierStore",
    "IWarehouseStore",
    "IUserRoleStore",
]
