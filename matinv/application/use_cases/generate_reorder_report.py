"""Generate Reorder Report Use Case."""

from datetime import datetime

from matinv.application.dto.responses import ReorderLineResponse, ReorderReportResponse
from matinv.config import get_logger
from matinv.core.entities.material import Material, StockStatus
from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.interfaces.reference_store import ISupplierStore
from matinv.core.services.reorder_selector import (
    REORDER_STATUSES,
    ReorderReport,
    build_reorder_report,
)

logger = get_logger(__name__)

PAGE_SIZE = 500


async def load_all_materials(
    store: IMaterialStore,
    statuses: list[StockStatus] | None = None,
) -> list[Material]:
    """Read every matching material, page by page."""
    materials: list[Material] = []
    offset = 0
    while True:
        page = await store.list_materials(limit=PAGE_SIZE, offset=offset, statuses=statuses)
        materials.extend(page)
        if len(page) < PAGE_SIZE:
            return materials
        offset += PAGE_SIZE


class GenerateReorderReportUseCase:
    """List critical and low materials with recommended order quantities."""

    def __init__(
        self,
        material_store: IMaterialStore | None = None,
        supplier_store: ISupplierStore | None = None,
    ):
        self._material_store = material_store
        self._supplier_store = supplier_store

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from matinv.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from matinv.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def execute(self, now: datetime | None = None) -> ReorderReport:
        """Execute reorder report use case."""
        store = await self._get_material_store()
        materials = await load_all_materials(
            store, statuses=sorted(REORDER_STATUSES, key=lambda s: s.severity)
        )

        supplier_ids = [m.supplier_id for m in materials if m.supplier_id]
        suppliers = {}
        if supplier_ids:
            supplier_store = await self._get_supplier_store()
            suppliers = await supplier_store.get_suppliers(supplier_ids)

        report = build_reorder_report(materials, suppliers, now)

        logger.info(
            "reorder_report_generated",
            lines=len(report.lines),
            critical=report.critical_count,
            low=report.low_count,
        )
        return report

    def to_response(self, report: ReorderReport) -> ReorderReportResponse:
        """Convert report to API response."""
        return ReorderReportResponse(
            generated_at=report.generated_at,
            total=len(report.lines),
            critical_count=report.critical_count,
            low_count=report.low_count,
            lines=[
                ReorderLineResponse(
                    material_id=line.material.id or "",
                    material_code=line.material.material_code,
                    name=line.material.name,
                    unit=line.material.unit,
                    status=line.material.status.value,
                    current_quantity=line.material.current_quantity,
                    reorder_point=line.material.reorder_point,
                    safety_stock=line.material.safety_stock,
                    lead_time_days=line.material.lead_time_days,
                    recommended_order_qty=line.recommended_order_qty,
                    days_until_shortage=line.days_until_shortage,
                    days_until_shortage_label=line.days_until_shortage_label,
                    urgent=line.urgent,
                    supplier_id=line.material.supplier_id,
                    supplier_name=line.supplier_name,
                    supplier_email=line.supplier_email,
                )
                for line in report.lines
            ],
        )
