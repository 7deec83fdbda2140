"""Stock ledger entities."""

import math
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Absolute tolerance for the before + change == after check
_BALANCE_TOLERANCE = 1e-9


class UpdateReason(str, Enum):
    """Why a stock quantity was adjusted."""

    PURCHASE = "purchase"
    PRODUCTION_USE = "production_use"
    ADJUSTMENT = "adjustment"
    DAMAGE = "damage"
    RETURN = "return"


class StockHistoryEntry(BaseModel):
    """
    Immutable record of one stock adjustment.

    Always balanced: quantity_after == quantity_before + quantity_change,
    and quantity_after is never negative.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    material_id: str
    user_id: str
    quantity_before: float = Field(..., ge=0)
    quantity_after: float = Field(..., ge=0)
    quantity_change: float
    reason: UpdateReason
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def check_balance(self) -> "StockHistoryEntry":
        """Reject entries whose before/change/after do not add up."""
        expected = self.quantity_before + self.quantity_change
        if not math.isclose(
            self.quantity_after, expected, rel_tol=0.0, abs_tol=_BALANCE_TOLERANCE
        ):
            raise ValueError(
                f"quantity_after ({self.quantity_after}) must equal "
                f"quantity_before + quantity_change ({expected})"
            )
        return self


class StockHistoryRecord(BaseModel):
    """History entry joined with the material it belongs to."""

    entry: StockHistoryEntry
    material_code: str
    material_name: str
    unit: str
