"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from matinv.application.dto.converters import (
    entry_to_response,
    material_to_response,
    record_to_response,
    supplier_to_response,
    warehouse_to_response,
)
from matinv.application.dto.requests import (
    CreateMaterialRequest,
    CreateSupplierRequest,
    CreateWarehouseRequest,
    StockAdjustmentRequest,
    UpdateMaterialRequest,
    UpdateSupplierRequest,
    UpdateWarehouseRequest,
)
from matinv.application.dto.responses import (
    ActorResponse,
    ComponentHealthResponse,
    DashboardSummaryResponse,
    ErrorResponse,
    HealthResponse,
    MaterialListResponse,
    MaterialResponse,
    PaginatedResponse,
    ReorderLineResponse,
    ReorderReportResponse,
    RoleAssignmentListResponse,
    RoleAssignmentResponse,
    StockAdjustmentResponse,
    StockHistoryEntryResponse,
    StockHistoryListResponse,
    SupplierListResponse,
    SupplierResponse,
    WarehouseListResponse,
    WarehouseResponse,
)

__all__ = [
    # Requests
    "CreateMaterialRequest",
    "UpdateMaterialRequest",
    "StockAdjustmentRequest",
    "CreateSupplierRequest",
    "UpdateSupplierRequest",
    "CreateWarehouseRequest",
    "UpdateWarehouseRequest",
    # Responses
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
    "PaginatedResponse",
    "MaterialResponse",
    "MaterialListResponse",
    "StockHistoryEntryResponse",
    "StockHistoryListResponse",
    "StockAdjustmentResponse",
    "SupplierResponse",
    "SupplierListResponse",
    "WarehouseResponse",
    "WarehouseListResponse",
    "ReorderLineResponse",
    "ReorderReportResponse",
    "DashboardSummaryResponse",
    "ActorResponse",
    "RoleAssignmentResponse",
    "RoleAssignmentListResponse",
    # Converters
    "material_to_response",
    "entry_to_response",
    "record_to_response",
    "supplier_to_response",
    "warehouse_to_response",
]
