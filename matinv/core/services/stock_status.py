"""
Stock status engine.

Pure functions deriving a material's alert status, projected shortage
date and recommended replenishment quantity from its numeric fields.
Every write path calls `refresh_derived_fields` so the stored status
never drifts from the quantities it describes.
"""

import math
from datetime import UTC, datetime, timedelta

from matinv.core.entities.material import Material, StockStatus

# Reported by days_until_shortage once the projected date is today or past
STOCK_OUT = 0

# Decimal places quantities are kept to, so float noise like
# 0.19999999999999998 or 100.00000000000001 does not cross a whole
# number or zero
QUANTITY_PRECISION = 9


def normalize_quantity(value: float) -> float:
    """Round away float noise; never returns -0.0."""
    return round(value, QUANTITY_PRECISION) + 0.0


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def derive_status(
    current_quantity: float,
    safety_stock: float,
    reorder_point: float,
) -> StockStatus:
    """
    Classify a stock level.

    critical at or below safety stock, low at or below the reorder point,
    safe otherwise. Ties resolve to the more severe status.
    """
    if current_quantity <= safety_stock:
        return StockStatus.CRITICAL
    if current_quantity <= reorder_point:
        return StockStatus.LOW
    return StockStatus.SAFE


def derive_shortage_date(
    current_quantity: float,
    avg_daily_usage: float,
    now: datetime | None = None,
) -> datetime | None:
    """
    Project when stock runs out at the current usage rate.

    Returns None when there is no usage. Partial days are truncated.
    """
    if avg_daily_usage <= 0:
        return None
    now = _as_utc(now) if now is not None else _utc_now()
    days_left = math.floor(normalize_quantity(current_quantity / avg_daily_usage))
    return now + timedelta(days=days_left)


def days_until_shortage(
    shortage_date: datetime | None,
    now: datetime | None = None,
) -> int | None:
    """
    Whole days from now until the shortage date.

    None without a shortage date; STOCK_OUT when the date is today or past.
    """
    if shortage_date is None:
        return None
    now = _as_utc(now) if now is not None else _utc_now()
    remaining = _as_utc(shortage_date) - now
    days = math.floor(remaining / timedelta(days=1))
    if days <= 0:
        return STOCK_OUT
    return days


def describe_days_until_shortage(days: int | None) -> str:
    """Human-readable form of a days_until_shortage result."""
    if days is None:
        return "N/A"
    if days == STOCK_OUT:
        return "stock-out"
    return f"{days} days"


def recommended_order_quantity(
    lead_time_days: int,
    avg_daily_usage: float,
    safety_stock: float,
    current_quantity: float,
) -> int:
    """
    Quantity to order now.

    Covers usage over the supplier lead time plus the safety buffer,
    net of stock on hand. Never negative.
    """
    shortfall = lead_time_days * avg_daily_usage + safety_stock - current_quantity
    return max(0, math.ceil(normalize_quantity(shortfall)))


def refresh_derived_fields(material: Material, now: datetime | None = None) -> Material:
    """Return a copy of the material with status and shortage date re-derived."""
    return material.model_copy(
        update={
            "status": derive_status(
                material.current_quantity,
                material.safety_stock,
                material.reorder_point,
            ),
            "shortage_date": derive_shortage_date(
                material.current_quantity,
                material.avg_daily_usage,
                now,
            ),
        }
    )


def material_recommended_order_quantity(material: Material) -> int:
    """recommended_order_quantity for a material's own fields."""
    return recommended_order_quantity(
        material.lead_time_days,
        material.avg_daily_usage,
        material.safety_stock,
        material.current_quantity,
    )
