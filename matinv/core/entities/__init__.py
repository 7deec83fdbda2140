"""Core domain entities."""

from matinv.core.entities.actor import Actor, Role, RoleAssignment
from matinv.core.entities.material import Material, StockStatus
from matinv.core.entities.stock_history import (
    StockHistoryEntry,
    StockHistoryRecord,
    UpdateReason,
)
from matinv.core.entities.supplier import Supplier, Warehouse

__all__ = [
    # Actor
    "Actor",
    "Role",
    "RoleAssignment",
    # Material
    "Material",
    "StockStatus",
    # Stock history
    "StockHistoryEntry",
    "StockHistoryRecord",
    "UpdateReason",
    # Reference data
    "Supplier",
    "Warehouse",
]
