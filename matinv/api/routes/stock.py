"""Stock adjustment and ledger endpoints."""

from fastapi import APIRouter, Depends, Query, status

from matinv.api.dependencies import (
    get_adjust_stock_use_case,
    get_app_settings,
    get_current_actor,
    get_history_store,
)
from matinv.application.dto.converters import record_to_response
from matinv.application.dto.requests import StockAdjustmentRequest
from matinv.application.dto.responses import (
    ErrorResponse,
    StockAdjustmentResponse,
    StockHistoryListResponse,
)
from matinv.application.use_cases.adjust_stock import AdjustStockUseCase
from matinv.config import Settings
from matinv.core.entities.actor import Actor
from matinv.core.interfaces import IStockHistoryStore

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.post(
    "/adjustments",
    response_model=StockAdjustmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def adjust_stock(
    request: StockAdjustmentRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockAdjustmentResponse:
    """Apply a signed quantity change and record it in the stock history."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.get("/history", response_model=StockHistoryListResponse)
async def list_history(
    material_id: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_current_actor),
    store: IStockHistoryStore = Depends(get_history_store),
    settings: Settings = Depends(get_app_settings),
) -> StockHistoryListResponse:
    """Stock history, newest first."""
    limit = limit or settings.inventory.history_page_size
    records = await store.list_history(limit=limit, offset=offset, material_id=material_id)
    return StockHistoryListResponse(
        entries=[record_to_response(r) for r in records],
        limit=limit,
        offset=offset,
        material_id=material_id,
    )
