"""Tests for supplier, warehouse and user role stores."""

import pytest

from matinv.core.entities.actor import Role, RoleAssignment
from matinv.core.exceptions import (
    DatabaseError,
    SupplierNotFoundError,
    WarehouseNotFoundError,
)
from matinv.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from matinv.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from matinv.infrastructure.storage.sqlite.user_role_store import SQLiteUserRoleStore
from matinv.infrastructure.storage.sqlite.warehouse_store import SQLiteWarehouseStore


@pytest.fixture
def suppliers(db) -> SQLiteSupplierStore:
    return SQLiteSupplierStore()


@pytest.fixture
def warehouses(db) -> SQLiteWarehouseStore:
    return SQLiteWarehouseStore()


@pytest.fixture
def roles(db) -> SQLiteUserRoleStore:
    return SQLiteUserRoleStore()


class TestSQLiteSupplierStore:
    async def test_create_and_get(self, suppliers, sample_supplier):
        created = await suppliers.create_supplier(sample_supplier)

        fetched = await suppliers.get_supplier(created.id)

        assert fetched.name == "Steel Corp Ltd"
        assert fetched.email == "john@steelcorp.com"
        assert fetched.rating == 4.5

    async def test_list_ordered_by_name(self, suppliers, sample_supplier):
        await suppliers.create_supplier(sample_supplier.model_copy(update={"name": "Zeta"}))
        await suppliers.create_supplier(sample_supplier.model_copy(update={"name": "Alpha"}))

        assert [s.name for s in await suppliers.list_suppliers()] == ["Alpha", "Zeta"]

    async def test_get_suppliers_by_ids(self, suppliers, sample_supplier):
        a = await suppliers.create_supplier(sample_supplier)
        b = await suppliers.create_supplier(sample_supplier.model_copy(update={"name": "B"}))

        found = await suppliers.get_suppliers([a.id, b.id, a.id, "missing"])

        assert set(found) == {a.id, b.id}
        assert await suppliers.get_suppliers([]) == {}

    async def test_update(self, suppliers, sample_supplier):
        created = await suppliers.create_supplier(sample_supplier)

        await suppliers.update_supplier(created.model_copy(update={"rating": 3.0}))

        assert (await suppliers.get_supplier(created.id)).rating == 3.0

    async def test_update_missing(self, suppliers, sample_supplier):
        with pytest.raises(SupplierNotFoundError):
            await suppliers.update_supplier(sample_supplier.model_copy(update={"id": "nope"}))

    async def test_delete(self, suppliers, sample_supplier):
        created = await suppliers.create_supplier(sample_supplier)

        assert await suppliers.delete_supplier(created.id) is True
        assert await suppliers.delete_supplier(created.id) is False
        assert await suppliers.get_supplier(created.id) is None

    async def test_duplicate_id_is_a_database_error(self, suppliers, sample_supplier):
        created = await suppliers.create_supplier(sample_supplier)

        with pytest.raises(DatabaseError, match="create_supplier"):
            await suppliers.create_supplier(sample_supplier.model_copy(update={"id": created.id}))

        assert len(await suppliers.list_suppliers()) == 1


class TestSQLiteWarehouseStore:
    async def test_create_get_update(self, warehouses, sample_warehouse):
        created = await warehouses.create_warehouse(sample_warehouse)
        assert (await warehouses.get_warehouse(created.id)).capacity == 10000

        await warehouses.update_warehouse(created.model_copy(update={"capacity": None}))

        fetched = await warehouses.get_warehouse(created.id)
        assert fetched.capacity is None
        assert fetched.location == "Building A, Floor 1"

    async def test_update_missing(self, warehouses, sample_warehouse):
        with pytest.raises(WarehouseNotFoundError):
            await warehouses.update_warehouse(sample_warehouse.model_copy(update={"id": "nope"}))

    async def test_duplicate_id_is_a_database_error(self, warehouses, sample_warehouse):
        created = await warehouses.create_warehouse(sample_warehouse)

        with pytest.raises(DatabaseError) as excinfo:
            await warehouses.create_warehouse(sample_warehouse.model_copy(update={"id": created.id}))

        assert excinfo.value.code == "DATABASE_ERROR"
        assert excinfo.value.details["operation"] == "create_warehouse"

    async def test_delete_detaches_materials(
        self, warehouses, sample_warehouse, sample_material
    ):
        created = await warehouses.create_warehouse(sample_warehouse)
        materials = SQLiteMaterialStore()
        material = await materials.create_material(
            sample_material.model_copy(update={"warehouse_id": created.id})
        )

        assert await warehouses.delete_warehouse(created.id) is True

        assert (await materials.get_material(material.id)).warehouse_id is None
        assert await warehouses.list_warehouses() == []


class TestSQLiteUserRoleStore:
    async def test_no_roles(self, roles):
        assert await roles.get_roles("nobody") == frozenset()

    async def test_assign_is_idempotent(self, roles):
        await roles.assign_role("u1", Role.MANAGER)
        await roles.assign_role("u1", Role.MANAGER)
        await roles.assign_role("u1", Role.OPERATOR)

        assert await roles.get_roles("u1") == frozenset({Role.MANAGER, Role.OPERATOR})

    async def test_revoke(self, roles):
        await roles.assign_role("u1", Role.ADMIN)

        assert await roles.revoke_role("u1", Role.ADMIN) is True
        assert await roles.revoke_role("u1", Role.ADMIN) is False
        assert await roles.get_roles("u1") == frozenset()

    async def test_list_assignments(self, roles):
        await roles.assign_role("u2", Role.OPERATOR)
        await roles.assign_role("u1", Role.ADMIN)

        assert await roles.list_assignments() == [
            RoleAssignment(user_id="u1", role=Role.ADMIN),
            RoleAssignment(user_id="u2", role=Role.OPERATOR),
        ]
