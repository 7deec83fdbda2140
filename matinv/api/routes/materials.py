"""Material catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from matinv.api.dependencies import (
    get_create_material_use_case,
    get_current_actor,
    get_mat_store,
    get_policy,
    get_update_material_use_case,
)
from matinv.application.dto.converters import material_to_response
from matinv.application.dto.requests import CreateMaterialRequest, UpdateMaterialRequest
from matinv.application.dto.responses import (
    ErrorResponse,
    MaterialListResponse,
    MaterialResponse,
)
from matinv.application.policies import AccessPolicy, Action
from matinv.application.use_cases.create_material import CreateMaterialUseCase
from matinv.application.use_cases.update_material import UpdateMaterialUseCase
from matinv.core.entities.actor import Actor
from matinv.core.entities.material import StockStatus
from matinv.core.exceptions import MaterialNotFoundError
from matinv.core.interfaces import IMaterialStore

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.get("", response_model=MaterialListResponse)
async def list_materials(
    status_filter: list[StockStatus] | None = Query(default=None, alias="status"),
    supplier_id: str | None = None,
    warehouse_id: str | None = None,
    search: str | None = Query(
        default=None, max_length=100, description="Substring of the material code or name"
    ),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_current_actor),
    store: IMaterialStore = Depends(get_mat_store),
) -> MaterialListResponse:
    """
    List materials ordered by code.

    Filters combine: status (repeatable), supplier, warehouse and a
    case-insensitive search on code or name. `total` counts every match,
    not just this page.
    """
    filters = {
        "statuses": status_filter,
        "supplier_id": supplier_id,
        "warehouse_id": warehouse_id,
        "search": search,
    }
    materials = await store.list_materials(limit=limit, offset=offset, **filters)
    total = await store.count_materials(**filters)
    return MaterialListResponse(
        items=[material_to_response(m) for m in materials],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(materials) < total,
    )


@router.get(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_material(
    material_id: str,
    actor: Actor = Depends(get_current_actor),
    store: IMaterialStore = Depends(get_mat_store),
) -> MaterialResponse:
    """Get a material with its derived stock indicators."""
    material = await store.get_material(material_id)
    if material is None:
        raise MaterialNotFoundError(material_id)
    return material_to_response(material)


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_material(
    request: CreateMaterialRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: CreateMaterialUseCase = Depends(get_create_material_use_case),
) -> MaterialResponse:
    """Create a material. Requires admin or manager."""
    result = await use_case.execute(request, actor)
    return use_case.to_response(result)


@router.patch(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_material(
    material_id: str,
    request: UpdateMaterialRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: UpdateMaterialUseCase = Depends(get_update_material_use_case),
) -> MaterialResponse:
    """Update material metadata and thresholds. Requires admin or manager."""
    result = await use_case.execute(material_id, request, actor)
    return use_case.to_response(result)


@router.delete(
    "/{material_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def delete_material(
    material_id: str,
    actor: Actor = Depends(get_current_actor),
    store: IMaterialStore = Depends(get_mat_store),
    policy: AccessPolicy = Depends(get_policy),
) -> None:
    """Delete a material without stock history. Requires admin."""
    policy.require(actor, Action.DELETE_MATERIAL)
    if not await store.delete_material(material_id):
        raise MaterialNotFoundError(material_id)
