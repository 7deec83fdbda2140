"""
Dependency injection container for FastAPI.

Provides stores, use cases and the authenticated actor to route handlers.
"""

from fastapi import Depends, Request

from matinv.application.policies import AccessPolicy, get_access_policy
from matinv.application.use_cases import (
    AdjustStockUseCase,
    CreateMaterialUseCase,
    GenerateReorderReportUseCase,
    GetDashboardSummaryUseCase,
    UpdateMaterialUseCase,
)
from matinv.config import Settings, bind_log_context, get_logger, get_settings
from matinv.core.entities.actor import Actor
from matinv.core.exceptions import UnauthenticatedError
from matinv.core.interfaces import (
    IMaterialStore,
    IStockHistoryStore,
    ISupplierStore,
    IUserRoleStore,
    IWarehouseStore,
)
from matinv.infrastructure.storage.sqlite import (
    get_material_store,
    get_stock_history_store,
    get_supplier_store,
    get_user_role_store,
    get_warehouse_store,
)

logger = get_logger(__name__)


def get_app_settings() -> Settings:
    """Get application settings."""
    return get_settings()


def get_policy() -> AccessPolicy:
    """Get the access policy."""
    return get_access_policy()


# Store dependencies
async def get_mat_store() -> IMaterialStore:
    """Get material store."""
    return await get_material_store()


async def get_history_store() -> IStockHistoryStore:
    """Get stock history store."""
    return await get_stock_history_store()


async def get_sup_store() -> ISupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_wh_store() -> IWarehouseStore:
    """Get warehouse store."""
    return await get_warehouse_store()


async def get_role_store() -> IUserRoleStore:
    """Get user role store."""
    return await get_user_role_store()


# Use case dependencies
def get_create_material_use_case() -> CreateMaterialUseCase:
    """Get create material use case."""
    return CreateMaterialUseCase()


def get_update_material_use_case() -> UpdateMaterialUseCase:
    """Get update material use case."""
    return UpdateMaterialUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase()


def get_reorder_report_use_case() -> GenerateReorderReportUseCase:
    """Get reorder report use case."""
    return GenerateReorderReportUseCase()


def get_dashboard_summary_use_case() -> GetDashboardSummaryUseCase:
    """Get dashboard summary use case."""
    return GetDashboardSummaryUseCase()


# Authentication
async def get_current_actor(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    role_store: IUserRoleStore = Depends(get_role_store),
) -> Actor:
    """
    Resolve the authenticated actor.

    The user id is supplied by the upstream auth proxy in a trusted header;
    roles come from the role assignments table.
    """
    user_id = request.headers.get(settings.auth.user_header, "").strip()
    if not user_id:
        raise UnauthenticatedError(f"{request.method} {request.url.path}")

    roles = await role_store.get_roles(user_id)
    request.state.user_id = user_id
    bind_log_context(user_id=user_id)
    logger.debug("actor_resolved", roles=sorted(r.value for r in roles))
    return Actor(user_id=user_id, roles=roles)
