"""Abstract interfaces for supplier, warehouse, and user role storage."""

from abc import ABC, abstractmethod

from matinv.core.entities.actor import Role, RoleAssignment
from matinv.core.entities.supplier import Supplier, Warehouse


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a new supplier."""

    @abstractmethod
    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        """Get supplier by ID."""

    @abstractmethod
    async def list_suppliers(self, limit: int = 100, offset: int = 0) -> list[Supplier]:
        """List suppliers ordered by name."""

    @abstractmethod
    async def get_suppliers(self, supplier_ids: list[str]) -> dict[str, Supplier]:
        """Fetch several suppliers keyed by ID; unknown IDs are skipped."""

    @abstractmethod
    async def update_supplier(self, supplier: Supplier) -> Supplier:
        """Update a supplier."""

    @abstractmethod
    async def delete_supplier(self, supplier_id: str) -> bool:
        """Delete a supplier, detaching it from materials."""


class IWarehouseStore(ABC):
    """Interface for warehouse persistence."""

    @abstractmethod
    async def create_warehouse(self, warehouse: Warehouse) -> Warehouse:
        """Create a new warehouse."""

    @abstractmethod
    async def get_warehouse(self, warehouse_id: str) -> Warehouse | None:
        """Get warehouse by ID."""

    @abstractmethod
    async def list_warehouses(self, limit: int = 100, offset: int = 0) -> list[Warehouse]:
        """List warehouses ordered by name."""

    @abstractmethod
    async def update_warehouse(self, warehouse: Warehouse) -> Warehouse:
        """Update a warehouse."""

    @abstractmethod
    async def delete_warehouse(self, warehouse_id: str) -> bool:
        """Delete a warehouse, detaching it from materials."""


class IUserRoleStore(ABC):
    """Interface for role assignments."""

    @abstractmethod
    async def get_roles(self, user_id: str) -> frozenset[Role]:
        """Roles granted to a user (empty if none)."""

    @abstractmethod
    async def assign_role(self, user_id: str, role: Role) -> RoleAssignment:
        """Grant a role; granting an existing role is a no-op."""

    @abstractmethod
    async def revoke_role(self, user_id: str, role: Role) -> bool:
        """Revoke a role. Returns False if it was not granted."""

    @abstractmethod
    async def list_assignments(self) -> list[RoleAssignment]:
        """All role assignments."""
