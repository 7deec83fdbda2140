"""API tests for supplier and warehouse endpoints."""

from matinv.core.entities.supplier import Supplier, Warehouse


def _with_id(entity):
    return entity.model_copy(update={"id": "new-1"})


class TestSuppliers:
    async def test_list(self, client, mock_supplier_store, operator_headers):
        mock_supplier_store.list_suppliers.return_value = [Supplier(id="s1", name="Acme")]

        resp = await client.get("/api/suppliers", headers=operator_headers)

        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["items"][0]["name"] == "Acme"

    async def test_get_missing(self, client, mock_supplier_store, operator_headers):
        mock_supplier_store.get_supplier.return_value = None

        resp = await client.get("/api/suppliers/nope", headers=operator_headers)

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "SUPPLIER_NOT_FOUND"

    async def test_manager_creates(self, client, mock_supplier_store, manager_headers):
        mock_supplier_store.create_supplier.side_effect = _with_id

        resp = await client.post(
            "/api/suppliers",
            json={"name": "Steel Corp Ltd", "email": "buy@steelcorp.test", "rating": 4},
            headers=manager_headers,
        )

        assert resp.status_code == 201
        assert resp.json()["id"] == "new-1"
        created = mock_supplier_store.create_supplier.await_args.args[0]
        assert created.rating == 4

    async def test_operator_cannot_create(self, client, mock_supplier_store, operator_headers):
        resp = await client.post(
            "/api/suppliers", json={"name": "Acme"}, headers=operator_headers
        )

        assert resp.status_code == 403
        mock_supplier_store.create_supplier.assert_not_called()

    async def test_rating_out_of_range(self, client, manager_headers):
        resp = await client.post(
            "/api/suppliers", json={"name": "Acme", "rating": 6}, headers=manager_headers
        )
        assert resp.status_code == 422

    async def test_delete_requires_admin(
        self, client, mock_supplier_store, manager_headers, admin_headers
    ):
        mock_supplier_store.delete_supplier.return_value = True

        denied = await client.delete("/api/suppliers/s1", headers=manager_headers)
        allowed = await client.delete("/api/suppliers/s1", headers=admin_headers)

        assert denied.status_code == 403
        assert allowed.status_code == 204
        mock_supplier_store.delete_supplier.assert_awaited_once_with("s1")


class TestWarehouses:
    async def test_create(self, client, mock_warehouse_store, manager_headers):
        mock_warehouse_store.create_warehouse.side_effect = _with_id

        resp = await client.post(
            "/api/warehouses",
            json={"name": "Main", "location": "Building A", "capacity": 10000},
            headers=manager_headers,
        )

        assert resp.status_code == 201
        assert resp.json()["capacity"] == 10000

    async def test_clear_capacity(self, client, mock_warehouse_store, manager_headers):
        mock_warehouse_store.get_warehouse.return_value = Warehouse(
            id="w1", name="Main", location="Building A", capacity=10000
        )
        mock_warehouse_store.update_warehouse.side_effect = lambda w: w

        resp = await client.patch(
            "/api/warehouses/w1", json={"capacity": None}, headers=manager_headers
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["capacity"] is None
        assert data["name"] == "Main"

    async def test_update_missing(self, client, mock_warehouse_store, manager_headers):
        mock_warehouse_store.get_warehouse.return_value = None

        resp = await client.patch(
            "/api/warehouses/nope", json={"name": "X"}, headers=manager_headers
        )

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "WAREHOUSE_NOT_FOUND"

    async def test_delete_missing(self, client, mock_warehouse_store, admin_headers):
        mock_warehouse_store.delete_warehouse.return_value = False

        resp = await client.delete("/api/warehouses/nope", headers=admin_headers)

        assert resp.status_code == 404
