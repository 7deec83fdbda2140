"""Entity to response DTO conversion shared by use cases and routes."""

from datetime import datetime

from matinv.application.dto.responses import (
    MaterialResponse,
    StockHistoryEntryResponse,
    SupplierResponse,
    WarehouseResponse,
)
from matinv.core.entities.material import Material
from matinv.core.entities.stock_history import StockHistoryEntry, StockHistoryRecord
from matinv.core.entities.supplier import Supplier, Warehouse
from matinv.core.services.stock_status import (
    days_until_shortage,
    describe_days_until_shortage,
    material_recommended_order_quantity,
)


def material_to_response(material: Material, now: datetime | None = None) -> MaterialResponse:
    days = days_until_shortage(material.shortage_date, now)
    return MaterialResponse(
        id=material.id or "",
        material_code=material.material_code,
        name=material.name,
        unit=material.unit,
        supplier_id=material.supplier_id,
        warehouse_id=material.warehouse_id,
        current_quantity=material.current_quantity,
        reorder_point=material.reorder_point,
        safety_stock=material.safety_stock,
        avg_daily_usage=material.avg_daily_usage,
        lead_time_days=material.lead_time_days,
        status=material.status.value,
        shortage_date=material.shortage_date,
        days_until_shortage=days,
        days_until_shortage_label=describe_days_until_shortage(days),
        recommended_order_qty=material_recommended_order_quantity(material),
        created_at=material.created_at,
        updated_at=material.updated_at,
    )


def entry_to_response(entry: StockHistoryEntry) -> StockHistoryEntryResponse:
    return StockHistoryEntryResponse(
        id=entry.id or "",
        material_id=entry.material_id,
        user_id=entry.user_id,
        quantity_before=entry.quantity_before,
        quantity_after=entry.quantity_after,
        quantity_change=entry.quantity_change,
        reason=entry.reason.value,
        notes=entry.notes,
        created_at=entry.created_at,
    )


def record_to_response(record: StockHistoryRecord) -> StockHistoryEntryResponse:
    """Ledger entry with the code, name and unit of its material."""
    return entry_to_response(record.entry).model_copy(
        update={
            "material_code": record.material_code,
            "material_name": record.material_name,
            "unit": record.unit,
        }
    )


def supplier_to_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id or "",
        name=supplier.name,
        contact_person=supplier.contact_person,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        rating=supplier.rating,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


def warehouse_to_response(warehouse: Warehouse) -> WarehouseResponse:
    return WarehouseResponse(
        id=warehouse.id or "",
        name=warehouse.name,
        location=warehouse.location,
        capacity=warehouse.capacity,
        created_at=warehouse.created_at,
        updated_at=warehouse.updated_at,
    )
