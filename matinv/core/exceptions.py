"""
Domain exceptions for the materials inventory.

Every error carries a stable `code` and a `details` dict; the API returns
both for client errors (4xx) and only logs them for server faults.
"""

from typing import Any


class InventoryError(Exception):
    """Base exception for all inventory errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


# Storage Exceptions
class StorageError(InventoryError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Requested record does not exist."""

    pass


class MaterialNotFoundError(NotFoundError):
    """Material not found in storage."""

    def __init__(self, material_id: str):
        super().__init__(
            f"Material not found: {material_id}",
            code="MATERIAL_NOT_FOUND",
            details={"material_id": material_id},
        )


class SupplierNotFoundError(NotFoundError):
    """Supplier not found in storage."""

    def __init__(self, supplier_id: str):
        super().__init__(
            f"Supplier not found: {supplier_id}",
            code="SUPPLIER_NOT_FOUND",
            details={"supplier_id": supplier_id},
        )


class WarehouseNotFoundError(NotFoundError):
    """Warehouse not found in storage."""

    def __init__(self, warehouse_id: str):
        super().__init__(
            f"Warehouse not found: {warehouse_id}",
            code="WAREHOUSE_NOT_FOUND",
            details={"warehouse_id": warehouse_id},
        )


class DuplicateMaterialCodeError(StorageError):
    """Another material already uses this code."""

    def __init__(self, material_code: str, existing_id: str | None = None):
        super().__init__(
            f"Material code already in use: {material_code}",
            code="DUPLICATE_MATERIAL_CODE",
            details={"material_code": material_code, "existing_id": existing_id},
        )


class MaterialInUseError(StorageError):
    """Material is referenced by stock history and cannot be deleted."""

    def __init__(self, material_id: str, history_entries: int):
        super().__init__(
            f"Material {material_id} has {history_entries} stock history entries "
            "and cannot be deleted",
            code="MATERIAL_IN_USE",
            details={"material_id": material_id, "history_entries": history_entries},
        )


class PersistenceError(StorageError):
    """The storage layer rejected a write; nothing was committed."""

    pass


class DatabaseError(PersistenceError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConcurrentAdjustmentError(PersistenceError):
    """Material quantity changed between read and write."""

    def __init__(self, material_id: str, expected_quantity: float):
        super().__init__(
            f"Material {material_id} was modified concurrently "
            f"(expected quantity {expected_quantity:g}); reload and retry",
            code="CONCURRENT_ADJUSTMENT",
            details={"material_id": material_id, "expected_quantity": expected_quantity},
        )


# Stock Exceptions
class StockError(InventoryError):
    """Base exception for stock ledger operations."""

    pass


class InvalidAdjustmentError(StockError):
    """Adjustment would drive the quantity below zero."""

    def __init__(self, material_id: str | None, current_quantity: float, delta: float):
        super().__init__(
            f"Adjustment of {delta:g} would leave {current_quantity + delta:g} "
            f"on hand (current {current_quantity:g}); quantity cannot be negative",
            code="INVALID_ADJUSTMENT",
            details={
                "material_id": material_id,
                "current_quantity": current_quantity,
                "quantity_change": delta,
            },
        )


# Auth Exceptions
class AuthError(InventoryError):
    """Base exception for authentication and authorization."""

    pass


class UnauthenticatedError(AuthError):
    """No actor identity is available for the operation."""

    def __init__(self, operation: str | None = None):
        super().__init__(
            "Authentication required" + (f" to {operation}" if operation else ""),
            code="UNAUTHENTICATED",
            details={"operation": operation},
        )


class PermissionDeniedError(AuthError):
    """Actor lacks the role required for the operation."""

    def __init__(self, user_id: str, action: str, required: list[str]):
        super().__init__(
            f"User {user_id} may not {action} (requires one of: {', '.join(required)})",
            code="PERMISSION_DENIED",
            details={"user_id": user_id, "action": action, "required_roles": required},
        )


# Validation Exceptions
class ValidationError(InventoryError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )
