"""API tests for the current user and role management."""

from matinv.core.entities.actor import Role, RoleAssignment


class TestCurrentUser:
    async def test_me(self, client, manager_headers):
        resp = await client.get("/api/users/me", headers=manager_headers)

        assert resp.status_code == 200
        assert resp.json() == {
            "user_id": "manager-1",
            "roles": ["manager"],
            "is_admin": False,
            "is_elevated": True,
        }

    async def test_unknown_user_has_no_roles(self, client):
        resp = await client.get("/api/users/me", headers={"X-User-Id": "visitor"})

        assert resp.status_code == 200
        assert resp.json()["roles"] == []

    async def test_blank_header(self, client):
        resp = await client.get("/api/users/me", headers={"X-User-Id": "   "})
        assert resp.status_code == 401


class TestRoleManagement:
    async def test_list_requires_admin(self, client, manager_headers):
        resp = await client.get("/api/users/roles", headers=manager_headers)

        assert resp.status_code == 403
        assert resp.json()["error_code"] == "PERMISSION_DENIED"

    async def test_list(self, client, mock_role_store, admin_headers):
        mock_role_store.list_assignments.return_value = [
            RoleAssignment(user_id="admin-1", role=Role.ADMIN),
            RoleAssignment(user_id="operator-1", role=Role.OPERATOR),
        ]

        resp = await client.get("/api/users/roles", headers=admin_headers)

        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 2
        assert data["assignments"][1] == {"user_id": "operator-1", "role": "operator"}

    async def test_grant(self, client, mock_role_store, admin_headers):
        mock_role_store.assign_role.return_value = RoleAssignment(
            user_id="new-user", role=Role.MANAGER
        )

        resp = await client.put("/api/users/new-user/roles/manager", headers=admin_headers)

        assert resp.status_code == 200
        assert resp.json() == {"user_id": "new-user", "role": "manager"}
        mock_role_store.assign_role.assert_awaited_once_with("new-user", Role.MANAGER)

    async def test_grant_unknown_role(self, client, admin_headers):
        resp = await client.put("/api/users/new-user/roles/owner", headers=admin_headers)
        assert resp.status_code == 422

    async def test_revoke(self, client, mock_role_store, admin_headers):
        mock_role_store.revoke_role.return_value = True

        resp = await client.delete("/api/users/operator-1/roles/operator", headers=admin_headers)

        assert resp.status_code == 204

    async def test_revoke_missing(self, client, mock_role_store, admin_headers):
        mock_role_store.revoke_role.return_value = False

        resp = await client.delete("/api/users/operator-1/roles/admin", headers=admin_headers)

        assert resp.status_code == 404
        assert resp.json()["error_code"] == "ROLE_ASSIGNMENT_NOT_FOUND"
