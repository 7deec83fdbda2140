"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ComponentHealthResponse(BaseModel):
    """Health of a single dependency."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None
    schema_version: str | None = None
    pool_size: int | None = None
    idle_connections: int | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. MATERIAL_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    context: dict[str, Any] | None = Field(
        default=None, description="Structured fields of the error, e.g. the rejected quantity"
    )
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Materials ---


class MaterialResponse(BaseModel):
    """Material with its derived stock indicators."""

    id: str
    material_code: str
    name: str
    unit: str
    supplier_id: str | None = None
    warehouse_id: str | None = None
    current_quantity: float
    reorder_point: float
    safety_stock: float
    avg_daily_usage: float
    lead_time_days: int
    status: str
    shortage_date: datetime | None = None
    days_until_shortage: int | None = Field(
        default=None, description="Whole days until projected stock-out; 0 means stock-out"
    )
    days_until_shortage_label: str = Field(..., examples=["12 days", "stock-out", "N/A"])
    recommended_order_qty: int
    created_at: datetime
    updated_at: datetime


class MaterialListResponse(PaginatedResponse):
    """Paginated material list."""

    items: list[MaterialResponse]


# --- Stock ---


class StockHistoryEntryResponse(BaseModel):
    """A ledger entry."""

    id: str
    material_id: str
    material_code: str | None = None
    material_name: str | None = None
    unit: str | None = None
    user_id: str
    quantity_before: float
    quantity_after: float
    quantity_change: float
    reason: str
    notes: str | None = None
    created_at: datetime


class StockHistoryListResponse(BaseModel):
    """Page of ledger entries, newest first."""

    entries: list[StockHistoryEntryResponse]
    limit: int
    offset: int
    material_id: str | None = None


class StockAdjustmentResponse(BaseModel):
    """Result of a committed stock adjustment."""

    material: MaterialResponse
    entry: StockHistoryEntryResponse


# --- Suppliers & Warehouses ---


class SupplierResponse(BaseModel):
    """Supplier response DTO."""

    id: str
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    rating: float
    created_at: datetime
    updated_at: datetime


class SupplierListResponse(BaseModel):
    """List of suppliers."""

    items: list[SupplierResponse]
    total: int


class WarehouseResponse(BaseModel):
    """Warehouse response DTO."""

    id: str
    name: str
    location: str
    capacity: float | None = None
    created_at: datetime
    updated_at: datetime


class WarehouseListResponse(BaseModel):
    """List of warehouses."""

    items: list[WarehouseResponse]
    total: int


# --- Reports ---


class ReorderLineResponse(BaseModel):
    """One line of the reorder report."""

    material_id: str
    material_code: str
    name: str
    unit: str
    status: str
    current_quantity: float
    reorder_point: float
    safety_stock: float
    lead_time_days: int
    recommended_order_qty: int
    days_until_shortage: int | None = None
    days_until_shortage_label: str
    urgent: bool
    supplier_id: str | None = None
    supplier_name: str | None = None
    supplier_email: str | None = None


class ReorderReportResponse(BaseModel):
    """Materials needing replenishment, most severe first."""

    generated_at: datetime
    total: int
    critical_count: int
    low_count: int
    lines: list[ReorderLineResponse]


class DashboardSummaryResponse(BaseModel):
    """Stock level counts for the dashboard."""

    generated_at: datetime
    total_materials: int
    critical: int
    low: int
    safe: int


# --- Users ---


class ActorResponse(BaseModel):
    """The authenticated user and their roles."""

    user_id: str
    roles: list[str]
    is_admin: bool
    is_elevated: bool


class RoleAssignmentResponse(BaseModel):
    """A role granted to a user."""

    user_id: str
    role: str


class RoleAssignmentListResponse(BaseModel):
    """All role assignments."""

    assignments: list[RoleAssignmentResponse]
    total: int
