"""Application use cases."""

from matinv.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from matinv.application.use_cases.create_material import (
    CreateMaterialResult,
    CreateMaterialUseCase,
)
from matinv.application.use_cases.generate_reorder_report import (
    GenerateReorderReportUseCase,
    load_all_materials,
)
from matinv.application.use_cases.get_dashboard_summary import (
    DashboardSummaryResult,
    GetDashboardSummaryUseCase,
)
from matinv.application.use_cases.update_material import (
    UpdateMaterialResult,
    UpdateMaterialUseCase,
)

__all__ = [
    "CreateMaterialUseCase",
    "CreateMaterialResult",
    "UpdateMaterialUseCase",
    "UpdateMaterialResult",
    "AdjustStockUseCase",
    "AdjustStockResult",
    "GenerateReorderReportUseCase",
    "GetDashboardSummaryUseCase",
    "DashboardSummaryResult",
    "load_all_materials",
]
