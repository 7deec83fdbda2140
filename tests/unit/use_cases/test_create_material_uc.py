"""Tests for CreateMaterialUseCase."""

from unittest.mock import AsyncMock

import pytest

from matinv.application.dto.requests import CreateMaterialRequest
from matinv.application.use_cases.create_material import CreateMaterialUseCase
from matinv.core.entities.material import StockStatus
from matinv.core.entities.supplier import Supplier
from matinv.core.exceptions import (
    DuplicateMaterialCodeError,
    PermissionDeniedError,
    SupplierNotFoundError,
    UnauthenticatedError,
    WarehouseNotFoundError,
)
from matinv.core.services.stock_status import refresh_derived_fields


@pytest.fixture
def mock_material_store():
    store = AsyncMock()
    store.get_by_code.return_value = None
    # Mirror the store: assign an id and derive status
    store.create_material.side_effect = lambda material: refresh_derived_fields(
        material.model_copy(update={"id": "mat-new"})
    )
    return store


@pytest.fixture
def mock_supplier_store():
    return AsyncMock()


@pytest.fixture
def mock_warehouse_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_material_store, mock_supplier_store, mock_warehouse_store):
    return CreateMaterialUseCase(
        material_store=mock_material_store,
        supplier_store=mock_supplier_store,
        warehouse_store=mock_warehouse_store,
    )


def _request(**overrides) -> CreateMaterialRequest:
    values = {
        "material_code": "STL-001",
        "name": "Steel Sheets",
        "unit": "kg",
        "current_quantity": 450,
        "reorder_point": 500,
        "safety_stock": 200,
        "avg_daily_usage": 50,
    }
    values.update(overrides)
    return CreateMaterialRequest(**values)


class TestCreateMaterialUseCase:
    async def test_created_with_derived_status(self, use_case, mock_material_store, manager):
        result = await use_case.execute(_request(), manager)

        assert result.material.id == "mat-new"
        assert result.material.status == StockStatus.LOW
        assert result.material.shortage_date is not None
        mock_material_store.create_material.assert_awaited_once()

    async def test_lead_time_defaults_from_settings(
        self, use_case, mock_material_store, manager, monkeypatch
    ):
        monkeypatch.setenv("INVENTORY_DEFAULT_LEAD_TIME_DAYS", "12")

        result = await use_case.execute(_request(), manager)

        assert result.material.lead_time_days == 12

    async def test_explicit_lead_time_kept(self, use_case, manager):
        result = await use_case.execute(_request(lead_time_days=3), manager)
        assert result.material.lead_time_days == 3

    async def test_duplicate_code(self, use_case, mock_material_store, manager, make_material):
        mock_material_store.get_by_code.return_value = make_material(id="mat-1")

        with pytest.raises(DuplicateMaterialCodeError) as exc_info:
            await use_case.execute(_request(), manager)

        assert exc_info.value.details["existing_id"] == "mat-1"
        mock_material_store.create_material.assert_not_called()

    async def test_unknown_supplier(self, use_case, mock_supplier_store, manager):
        mock_supplier_store.get_supplier.return_value = None

        with pytest.raises(SupplierNotFoundError):
            await use_case.execute(_request(supplier_id="sup-x"), manager)

    async def test_known_supplier(self, use_case, mock_supplier_store, manager):
        mock_supplier_store.get_supplier.return_value = Supplier(id="sup-1", name="Acme")

        result = await use_case.execute(_request(supplier_id="sup-1"), manager)

        assert result.material.supplier_id == "sup-1"

    async def test_unknown_warehouse(self, use_case, mock_warehouse_store, manager):
        mock_warehouse_store.get_warehouse.return_value = None

        with pytest.raises(WarehouseNotFoundError):
            await use_case.execute(_request(warehouse_id="wh-x"), manager)

    async def test_operator_denied(self, use_case, mock_material_store, operator):
        with pytest.raises(PermissionDeniedError):
            await use_case.execute(_request(), operator)
        mock_material_store.create_material.assert_not_called()

    async def test_unauthenticated(self, use_case):
        with pytest.raises(UnauthenticatedError):
            await use_case.execute(_request(), None)

    async def test_to_response(self, use_case, manager):
        result = await use_case.execute(_request(), manager)
        response = use_case.to_response(result)
        assert response.status == "low"
        assert response.recommended_order_qty == 100
