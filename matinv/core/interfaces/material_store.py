"""
Abstract interface for material storage.

Implementations must derive status and shortage date on every write;
quantity changes go through IStockHistoryStore.commit_adjustment only.
"""

from abc import ABC, abstractmethod

from matinv.core.entities.material import Material, StockStatus


class IMaterialStore(ABC):
    """Interface for material persistence."""

    @abstractmethod
    async def create_material(self, material: Material) -> Material:
        """Create a new material record with derived fields computed."""

    @abstractmethod
    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""

    @abstractmethod
    async def get_by_code(self, material_code: str) -> Material | None:
        """Get material by its unique code."""

    @abstractmethod
    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        statuses: list[StockStatus] | None = None,
        supplier_id: str | None = None,
        warehouse_id: str | None = None,
        search: str | None = None,
    ) -> list[Material]:
        """
        List materials ordered by code, with optional filters.

        `search` matches a case-insensitive substring of the code or name.
        """

    @abstractmethod
    async def count_materials(
        self,
        statuses: list[StockStatus] | None = None,
        supplier_id: str | None = None,
        warehouse_id: str | None = None,
        search: str | None = None,
    ) -> int:
        """Number of materials matching the same filters as list_materials."""

    @abstractmethod
    async def update_material(self, material: Material) -> Material:
        """Update material metadata and thresholds; never the quantity."""

    @abstractmethod
    async def delete_material(self, material_id: str) -> bool:
        """Delete a material with no stock history. Returns False if absent."""
