"""Adjust Stock Use Case — signed quantity change recorded in the ledger."""

from dataclasses import dataclass
from datetime import datetime

from matinv.application.dto.converters import entry_to_response, material_to_response
from matinv.application.dto.requests import StockAdjustmentRequest
from matinv.application.dto.responses import StockAdjustmentResponse
from matinv.application.policies import AccessPolicy, Action, get_access_policy
from matinv.config import get_logger
from matinv.core.entities.actor import Actor
from matinv.core.entities.material import Material
from matinv.core.entities.stock_history import StockHistoryEntry
from matinv.core.exceptions import ConcurrentAdjustmentError, MaterialNotFoundError
from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.interfaces.stock_history_store import IStockHistoryStore
from matinv.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of a committed adjustment."""

    material: Material
    entry: StockHistoryEntry


class AdjustStockUseCase:
    """Apply a stock adjustment and commit it with its history entry."""

    def __init__(
        self,
        material_store: IMaterialStore | None = None,
        history_store: IStockHistoryStore | None = None,
        ledger: StockLedger | None = None,
        policy: AccessPolicy | None = None,
    ):
        self._material_store = material_store
        self._history_store = history_store
        self._ledger = ledger or StockLedger()
        self._policy = policy or get_access_policy()

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from matinv.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def _get_history_store(self) -> IStockHistoryStore:
        if self._history_store is None:
            from matinv.infrastructure.storage.sqlite import get_stock_history_store

            self._history_store = await get_stock_history_store()
        return self._history_store

    async def execute(
        self,
        request: StockAdjustmentRequest,
        actor: Actor | None,
        now: datetime | None = None,
    ) -> AdjustStockResult:
        """
        Execute adjust stock use case.

        Raises:
            UnauthenticatedError: No actor.
            MaterialNotFoundError: Unknown material.
            InvalidAdjustmentError: Quantity would go below zero.
            ConcurrentAdjustmentError: Quantity changed since it was read.
            DatabaseError: The commit failed.
        """
        self._policy.require(actor, Action.ADJUST_STOCK)

        logger.info(
            "adjust_stock_started",
            material_id=request.material_id,
            quantity_change=request.quantity_change,
            reason=request.reason.value,
            user_id=actor.user_id,
        )

        store = await self._get_material_store()
        material = await store.get_material(request.material_id)
        if material is None:
            raise MaterialNotFoundError(request.material_id)

        result = self._ledger.apply_adjustment(
            material,
            request.quantity_change,
            request.reason,
            actor,
            notes=request.notes,
            now=now,
        )

        history_store = await self._get_history_store()
        try:
            updated, entry = await history_store.commit_adjustment(result.material, result.entry)
        except ConcurrentAdjustmentError:
            logger.warning(
                "adjustment_conflict",
                material_id=request.material_id,
                expected_quantity=material.current_quantity,
            )
            raise

        logger.info(
            "adjust_stock_complete",
            material_id=updated.id,
            quantity_before=entry.quantity_before,
            quantity_after=entry.quantity_after,
            status=updated.status.value,
        )

        return AdjustStockResult(material=updated, entry=entry)

    def to_response(self, result: AdjustStockResult) -> StockAdjustmentResponse:
        """Convert result to API response."""
        return StockAdjustmentResponse(
            material=material_to_response(result.material),
            entry=entry_to_response(result.entry),
        )
