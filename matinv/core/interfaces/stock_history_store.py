"""Abstract interface for the stock ledger storage."""

from abc import ABC, abstractmethod

from matinv.core.entities.material import Material
from matinv.core.entities.stock_history import StockHistoryEntry, StockHistoryRecord


class IStockHistoryStore(ABC):
    """Interface for committing adjustments and reading the ledger."""

    @abstractmethod
    async def commit_adjustment(
        self, material: Material, entry: StockHistoryEntry
    ) -> tuple[Material, StockHistoryEntry]:
        """
        Persist the new material quantity and its history entry atomically.

        The update only applies if the stored quantity still equals
        `entry.quantity_before`; otherwise nothing is written and
        ConcurrentAdjustmentError is raised.
        """

    @abstractmethod
    async def list_history(
        self,
        limit: int = 20,
        offset: int = 0,
        material_id: str | None = None,
    ) -> list[StockHistoryRecord]:
        """List ledger entries, newest first."""

    @abstractmethod
    async def count_for_material(self, material_id: str) -> int:
        """Number of ledger entries for a material."""
