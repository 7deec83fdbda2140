"""Supplier endpoints."""

from fastapi import APIRouter, Depends, Query, status

from matinv.api.dependencies import get_current_actor, get_policy, get_sup_store
from matinv.application.dto.converters import supplier_to_response
from matinv.application.dto.requests import CreateSupplierRequest, UpdateSupplierRequest
from matinv.application.dto.responses import (
    ErrorResponse,
    SupplierListResponse,
    SupplierResponse,
)
from matinv.application.policies import AccessPolicy, Action
from matinv.core.entities.actor import Actor
from matinv.core.entities.supplier import Supplier
from matinv.core.exceptions import SupplierNotFoundError
from matinv.core.interfaces import ISupplierStore

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("", response_model=SupplierListResponse)
async def list_suppliers(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_current_actor),
    store: ISupplierStore = Depends(get_sup_store),
) -> SupplierListResponse:
    """List suppliers ordered by name."""
    suppliers = await store.list_suppliers(limit=limit, offset=offset)
    return SupplierListResponse(
        items=[supplier_to_response(s) for s in suppliers],
        total=len(suppliers),
    )


@router.get(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_supplier(
    supplier_id: str,
    actor: Actor = Depends(get_current_actor),
    store: ISupplierStore = Depends(get_sup_store),
) -> SupplierResponse:
    """Get a supplier."""
    supplier = await store.get_supplier(supplier_id)
    if supplier is None:
        raise SupplierNotFoundError(supplier_id)
    return supplier_to_response(supplier)


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}},
)
async def create_supplier(
    request: CreateSupplierRequest,
    actor: Actor = Depends(get_current_actor),
    store: ISupplierStore = Depends(get_sup_store),
    policy: AccessPolicy = Depends(get_policy),
) -> SupplierResponse:
    """Create a supplier. Requires admin or manager."""
    policy.require(actor, Action.MANAGE_SUPPLIERS)
    supplier = await store.create_supplier(Supplier(**request.model_dump()))
    return supplier_to_response(supplier)


@router.patch(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_supplier(
    supplier_id: str,
    request: UpdateSupplierRequest,
    actor: Actor = Depends(get_current_actor),
    store: ISupplierStore = Depends(get_sup_store),
    policy: AccessPolicy = Depends(get_policy),
) -> SupplierResponse:
    """Update a supplier. Requires admin or manager."""
    policy.require(actor, Action.MANAGE_SUPPLIERS)
    supplier = await store.get_supplier(supplier_id)
    if supplier is None:
        raise SupplierNotFoundError(supplier_id)

    updates = request.model_dump(exclude_unset=True, exclude_none=True)
    supplier = await store.update_supplier(
        Supplier.model_validate({**supplier.model_dump(), **updates})
    )
    return supplier_to_response(supplier)


@router.delete(
    "/{supplier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_supplier(
    supplier_id: str,
    actor: Actor = Depends(get_current_actor),
    store: ISupplierStore = Depends(get_sup_store),
    policy: AccessPolicy = Depends(get_policy),
) -> None:
    """Delete a supplier; its materials are kept without a supplier. Requires admin."""
    policy.require(actor, Action.DELETE_SUPPLIER)
    if not await store.delete_supplier(supplier_id):
        raise SupplierNotFoundError(supplier_id)
