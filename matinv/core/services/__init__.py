"""
Core business logic services.

Layer-pure services that depend only on:
- matinv/core/entities/*
- matinv/core/exceptions.py

NO infrastructure imports. Persistence happens in the application layer.
"""

from matinv.core.services.reorder_selector import (
    ReorderLine,
    ReorderReport,
    StockLevelSummary,
    build_reorder_report,
    select_for_reorder,
    summarize_stock_levels,
)
from matinv.core.services.stock_ledger import AdjustmentResult, StockLedger
from matinv.core.services.stock_status import (
    STOCK_OUT,
    days_until_shortage,
    derive_shortage_date,
    derive_status,
    describe_days_until_shortage,
    recommended_order_quantity,
    refresh_derived_fields,
)

__all__ = [
    # Stock status
    "STOCK_OUT",
    "derive_status",
    "derive_shortage_date",
    "days_until_shortage",
    "describe_days_until_shortage",
    "recommended_order_quantity",
    "refresh_derived_fields",
    # Ledger
    "StockLedger",
    "AdjustmentResult",
    # Reorder
    "ReorderLine",
    "ReorderReport",
    "StockLevelSummary",
    "select_for_reorder",
    "build_reorder_report",
    "summarize_stock_levels",
]
