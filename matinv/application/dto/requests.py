"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
Derived fields (status, shortage date) are never accepted from clients.
"""

from pydantic import BaseModel, Field

from matinv.core.entities.stock_history import UpdateReason

# --- Materials ---


class CreateMaterialRequest(BaseModel):
    """Request to create a material."""

    material_code: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Unique material code",
        examples=["STL-001"],
    )
    name: str = Field(..., min_length=1, max_length=200, description="Material name")
    unit: str = Field(..., min_length=1, max_length=20, description="Unit of measure")
    supplier_id: str | None = Field(default=None, description="Supplier ID")
    warehouse_id: str | None = Field(default=None, description="Warehouse ID")
    current_quantity: float = Field(default=0, ge=0, description="Opening quantity on hand")
    reorder_point: float = Field(default=0, ge=0, description="Quantity at which to reorder")
    safety_stock: float = Field(default=0, ge=0, description="Minimum buffer quantity")
    avg_daily_usage: float = Field(default=0, ge=0, description="Average units consumed per day")
    lead_time_days: int | None = Field(
        default=None,
        gt=0,
        description="Supplier lead time in days (defaults to the configured value)",
    )


class UpdateMaterialRequest(BaseModel):
    """Partial update of material metadata. Quantity changes use stock adjustments."""

    material_code: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    unit: str | None = Field(default=None, min_length=1, max_length=20)
    supplier_id: str | None = Field(default=None, description="Supplier ID")
    warehouse_id: str | None = Field(default=None, description="Warehouse ID")
    reorder_point: float | None = Field(default=None, ge=0)
    safety_stock: float | None = Field(default=None, ge=0)
    avg_daily_usage: float | None = Field(default=None, ge=0)
    lead_time_days: int | None = Field(default=None, gt=0)


# --- Stock ---


class StockAdjustmentRequest(BaseModel):
    """Request to adjust a material's stock by a signed quantity."""

    material_id: str = Field(..., min_length=1, description="Material ID")
    quantity_change: float = Field(
        ...,
        description="Signed quantity change (positive adds stock, negative removes it)",
        examples=[100, -25],
    )
    reason: UpdateReason = Field(..., description="Reason for the adjustment")
    notes: str | None = Field(default=None, max_length=1000, description="Additional notes")


# --- Suppliers ---


class CreateSupplierRequest(BaseModel):
    """Request to create a supplier."""

    name: str = Field(..., min_length=1, max_length=200)
    contact_person: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    rating: float = Field(default=5.0, ge=0, le=5)


class UpdateSupplierRequest(BaseModel):
    """Partial supplier update."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    contact_person: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    rating: float | None = Field(default=None, ge=0, le=5)


# --- Warehouses ---


class CreateWarehouseRequest(BaseModel):
    """Request to create a warehouse."""

    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field(..., min_length=1, max_length=500)
    capacity: float | None = Field(default=None, ge=0)


class UpdateWarehouseRequest(BaseModel):
    """Partial warehouse update."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    location: str | None = Field(default=None, min_length=1, max_length=500)
    capacity: float | None = Field(default=None, ge=0)
