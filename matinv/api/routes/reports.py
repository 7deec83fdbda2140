"""Reorder report and dashboard endpoints."""

from fastapi import APIRouter, Depends

from matinv.api.dependencies import (
    get_current_actor,
    get_dashboard_summary_use_case,
    get_reorder_report_use_case,
)
from matinv.application.dto.responses import DashboardSummaryResponse, ReorderReportResponse
from matinv.application.use_cases.generate_reorder_report import GenerateReorderReportUseCase
from matinv.application.use_cases.get_dashboard_summary import GetDashboardSummaryUseCase
from matinv.core.entities.actor import Actor

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/reorder", response_model=ReorderReportResponse)
async def reorder_report(
    actor: Actor = Depends(get_current_actor),
    use_case: GenerateReorderReportUseCase = Depends(get_reorder_report_use_case),
) -> ReorderReportResponse:
    """Critical and low materials with recommended order quantities."""
    report = await use_case.execute()
    return use_case.to_response(report)


@router.get("/dashboard", response_model=DashboardSummaryResponse)
async def dashboard_summary(
    actor: Actor = Depends(get_current_actor),
    use_case: GetDashboardSummaryUseCase = Depends(get_dashboard_summary_use_case),
) -> DashboardSummaryResponse:
    """Material counts per stock status."""
    result = await use_case.execute()
    return use_case.to_response(result)
