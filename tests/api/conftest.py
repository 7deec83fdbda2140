"""Fixtures for API tests: mocked stores behind real use cases."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from matinv.api.dependencies import (
    get_adjust_stock_use_case,
    get_create_material_use_case,
    get_dashboard_summary_use_case,
    get_history_store,
    get_mat_store,
    get_reorder_report_use_case,
    get_role_store,
    get_sup_store,
    get_update_material_use_case,
    get_wh_store,
)
from matinv.api.main import app
from matinv.application.use_cases import (
    AdjustStockUseCase,
    CreateMaterialUseCase,
    GenerateReorderReportUseCase,
    GetDashboardSummaryUseCase,
    UpdateMaterialUseCase,
)
from matinv.core.entities.actor import Role

ROLES = {
    "admin-1": frozenset({Role.ADMIN}),
    "manager-1": frozenset({Role.MANAGER}),
    "operator-1": frozenset({Role.OPERATOR}),
}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-User-Id": "admin-1"}


@pytest.fixture
def manager_headers() -> dict[str, str]:
    return {"X-User-Id": "manager-1"}


@pytest.fixture
def operator_headers() -> dict[str, str]:
    return {"X-User-Id": "operator-1"}


@pytest.fixture
def mock_role_store():
    store = AsyncMock()
    store.get_roles.side_effect = lambda user_id: ROLES.get(user_id, frozenset())
    return store


@pytest.fixture
def mock_material_store():
    store = AsyncMock()
    store.list_materials.return_value = []
    store.count_materials.return_value = 0
    store.get_material.return_value = None
    store.get_by_code.return_value = None
    return store


@pytest.fixture
def mock_history_store():
    store = AsyncMock()
    store.list_history.return_value = []
    return store


@pytest.fixture
def mock_supplier_store():
    store = AsyncMock()
    store.list_suppliers.return_value = []
    store.get_suppliers.return_value = {}
    return store


@pytest.fixture
def mock_warehouse_store():
    store = AsyncMock()
    store.list_warehouses.return_value = []
    return store


@pytest.fixture
async def client(
    mock_role_store,
    mock_material_store,
    mock_history_store,
    mock_supplier_store,
    mock_warehouse_store,
):
    overrides = {
        get_role_store: lambda: mock_role_store,
        get_mat_store: lambda: mock_material_store,
        get_history_store: lambda: mock_history_store,
        get_sup_store: lambda: mock_supplier_store,
        get_wh_store: lambda: mock_warehouse_store,
        get_create_material_use_case: lambda: CreateMaterialUseCase(
            mock_material_store, mock_supplier_store, mock_warehouse_store
        ),
        get_update_material_use_case: lambda: UpdateMaterialUseCase(
            mock_material_store, mock_supplier_store, mock_warehouse_store
        ),
        get_adjust_stock_use_case: lambda: AdjustStockUseCase(
            mock_material_store, mock_history_store
        ),
        get_reorder_report_use_case: lambda: GenerateReorderReportUseCase(
            mock_material_store, mock_supplier_store
        ),
        get_dashboard_summary_use_case: lambda: GetDashboardSummaryUseCase(
            mock_material_store
        ),
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
