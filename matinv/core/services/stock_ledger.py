"""
Stock ledger.

Applies a signed quantity adjustment to a material and produces the
matching immutable history entry. Nothing is persisted here: the caller
commits the updated material and the entry together in one transaction.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from matinv.config import get_logger
from matinv.core.entities.actor import Actor
from matinv.core.entities.material import Material
from matinv.core.entities.stock_history import StockHistoryEntry, UpdateReason
from matinv.core.exceptions import InvalidAdjustmentError, UnauthenticatedError
from matinv.core.services.stock_status import normalize_quantity, refresh_derived_fields

logger = get_logger(__name__)


@dataclass(frozen=True)
class AdjustmentResult:
    """Updated material and the ledger entry describing the change."""

    material: Material
    entry: StockHistoryEntry


class StockLedger:
    """Computes stock adjustments."""

    def apply_adjustment(
        self,
        material: Material,
        delta: float,
        reason: UpdateReason | str,
        actor: Actor | None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> AdjustmentResult:
        """
        Apply `delta` to the material's quantity.

        Args:
            material: Material as currently persisted. Not modified.
            delta: Signed quantity change.
            reason: Why the stock changed.
            actor: Authenticated user making the change.
            notes: Optional free text kept with the entry.
            now: Timestamp for the entry and shortage projection.

        Returns:
            AdjustmentResult with the new material state and history entry.

        Raises:
            UnauthenticatedError: No actor.
            InvalidAdjustmentError: Quantity would go below zero.
            ValueError: The material has not been saved yet.
        """
        if actor is None:
            raise UnauthenticatedError("adjust stock")
        if material.id is None:
            raise ValueError("Only saved materials can be adjusted")

        quantity_before = material.current_quantity
        quantity_after = normalize_quantity(quantity_before + delta)
        if quantity_after < 0:
            logger.info(
                "adjustment_rejected",
                material_id=material.id,
                current_quantity=quantity_before,
                delta=delta,
            )
            raise InvalidAdjustmentError(material.id, quantity_before, delta)

        now = now or datetime.now(UTC)
        entry = StockHistoryEntry(
            material_id=material.id,
            user_id=actor.user_id,
            quantity_before=quantity_before,
            quantity_after=quantity_after,
            quantity_change=delta,
            reason=UpdateReason(reason),
            notes=notes or None,
            created_at=now,
        )

        updated = refresh_derived_fields(
            material.model_copy(
                update={"current_quantity": quantity_after, "updated_at": now}
            ),
            now,
        )
        return AdjustmentResult(material=updated, entry=entry)
