"""
Material domain entity.

A stocked raw material with its replenishment parameters and the
derived stock status fields.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class StockStatus(str, Enum):
    """Alert level of a material's stock."""

    CRITICAL = "critical"
    LOW = "low"
    SAFE = "safe"

    @property
    def severity(self) -> int:
        """Lower is more severe."""
        return _SEVERITY[self]


_SEVERITY = {
    StockStatus.CRITICAL: 0,
    StockStatus.LOW: 1,
    StockStatus.SAFE: 2,
}


class Material(BaseModel):
    """
    A material tracked in a warehouse.

    `status` and `shortage_date` are derived from the numeric fields and
    are recomputed by the stock status engine on every write; they are
    never taken from caller input.
    """

    id: str | None = None
    material_code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    supplier_id: str | None = None
    warehouse_id: str | None = None
    unit: str = Field(..., min_length=1)
    current_quantity: float = Field(default=0.0, ge=0)
    reorder_point: float = Field(default=0.0, ge=0)
    safety_stock: float = Field(default=0.0, ge=0)
    avg_daily_usage: float = Field(default=0.0, ge=0)
    lead_time_days: int = Field(default=7, gt=0)
    status: StockStatus = StockStatus.SAFE
    shortage_date: datetime | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def needs_reorder(self) -> bool:
        """True when the material is critical or low."""
        return self.status in (StockStatus.CRITICAL, StockStatus.LOW)
