"""Warehouse endpoints."""

from fastapi import APIRouter, Depends, Query, status

from matinv.api.dependencies import get_current_actor, get_policy, get_wh_store
from matinv.application.dto.converters import warehouse_to_response
from matinv.application.dto.requests import CreateWarehouseRequest, UpdateWarehouseRequest
from matinv.application.dto.responses import (
    ErrorResponse,
    WarehouseListResponse,
    WarehouseResponse,
)
from matinv.application.policies import AccessPolicy, Action
from matinv.core.entities.actor import Actor
from matinv.core.entities.supplier import Warehouse
from matinv.core.exceptions import WarehouseNotFoundError
from matinv.core.interfaces import IWarehouseStore

router = APIRouter(prefix="/api/warehouses", tags=["warehouses"])


@router.get("", response_model=WarehouseListResponse)
async def list_warehouses(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_current_actor),
    store: IWarehouseStore = Depends(get_wh_store),
) -> WarehouseListResponse:
    """List warehouses ordered by name."""
    warehouses = await store.list_warehouses(limit=limit, offset=offset)
    return WarehouseListResponse(
        items=[warehouse_to_response(w) for w in warehouses],
        total=len(warehouses),
    )


@router.get(
    "/{warehouse_id}",
    response_model=WarehouseResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_warehouse(
    warehouse_id: str,
    actor: Actor = Depends(get_current_actor),
    store: IWarehouseStore = Depends(get_wh_store),
) -> WarehouseResponse:
    """Get a warehouse."""
    warehouse = await store.get_warehouse(warehouse_id)
    if warehouse is None:
        raise WarehouseNotFoundError(warehouse_id)
    return warehouse_to_response(warehouse)


@router.post(
    "",
    response_model=WarehouseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}},
)
async def create_warehouse(
    request: CreateWarehouseRequest,
    actor: Actor = Depends(get_current_actor),
    store: IWarehouseStore = Depends(get_wh_store),
    policy: AccessPolicy = Depends(get_policy),
) -> WarehouseResponse:
    """Create a warehouse. Requires admin or manager."""
    policy.require(actor, Action.MANAGE_WAREHOUSES)
    warehouse = await store.create_warehouse(Warehouse(**request.model_dump()))
    return warehouse_to_response(warehouse)


@router.patch(
    "/{warehouse_id}",
    response_model=WarehouseResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_warehouse(
    warehouse_id: str,
    request: UpdateWarehouseRequest,
    actor: Actor = Depends(get_current_actor),
    store: IWarehouseStore = Depends(get_wh_store),
    policy: AccessPolicy = Depends(get_policy),
) -> WarehouseResponse:
    """Update a warehouse. Requires admin or manager."""
    policy.require(actor, Action.MANAGE_WAREHOUSES)
    warehouse = await store.get_warehouse(warehouse_id)
    if warehouse is None:
        raise WarehouseNotFoundError(warehouse_id)

    # capacity may be cleared with an explicit null
    updates = request.model_dump(exclude_unset=True)
    updates = {k: v for k, v in updates.items() if v is not None or k == "capacity"}
    warehouse = await store.update_warehouse(
        Warehouse.model_validate({**warehouse.model_dump(), **updates})
    )
    return warehouse_to_response(warehouse)


@router.delete(
    "/{warehouse_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_warehouse(
    warehouse_id: str,
    actor: Actor = Depends(get_current_actor),
    store: IWarehouseStore = Depends(get_wh_store),
    policy: AccessPolicy = Depends(get_policy),
) -> None:
    """Delete a warehouse; its materials are kept without a location. Requires admin."""
    policy.require(actor, Action.DELETE_WAREHOUSE)
    if not await store.delete_warehouse(warehouse_id):
        raise WarehouseNotFoundError(warehouse_id)
