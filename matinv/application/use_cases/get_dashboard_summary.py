"""Get Dashboard Summary Use Case."""

from dataclasses import dataclass
from datetime import UTC, datetime

from matinv.application.dto.responses import DashboardSummaryResponse
from matinv.application.use_cases.generate_reorder_report import load_all_materials
from matinv.core.interfaces.material_store import IMaterialStore
from matinv.core.services.reorder_selector import StockLevelSummary, summarize_stock_levels


@dataclass
class DashboardSummaryResult:
    generated_at: datetime
    summary: StockLevelSummary


class GetDashboardSummaryUseCase:
    """Count materials per stock status."""

    def __init__(self, material_store: IMaterialStore | None = None):
        self._material_store = material_store

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from matinv.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    async def execute(self, now: datetime | None = None) -> DashboardSummaryResult:
        store = await self._get_material_store()
        materials = await load_all_materials(store)
        return DashboardSummaryResult(
            generated_at=now or datetime.now(UTC),
            summary=summarize_stock_levels(materials),
        )

    def to_response(self, result: DashboardSummaryResult) -> DashboardSummaryResponse:
        return DashboardSummaryResponse(
            generated_at=result.generated_at,
            total_materials=result.summary.total,
            critical=result.summary.critical,
            low=result.summary.low,
            safe=result.summary.safe,
        )
