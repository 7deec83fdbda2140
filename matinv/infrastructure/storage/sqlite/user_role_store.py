"""SQLite implementation of user role assignments."""

from matinv.config import get_logger
from matinv.core.entities.actor import Role, RoleAssignment
from matinv.core.interfaces.reference_store import IUserRoleStore
from matinv.infrastructure.storage.sqlite.connection import database_write, get_connection

logger = get_logger(__name__)


class SQLiteUserRoleStore(IUserRoleStore):
    """Role assignments backed by the user_roles table."""

    async def get_roles(self, user_id: str) -> frozenset[Role]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT role FROM user_roles WHERE user_id = ?", (user_id,)
            )
            rows = await cursor.fetchall()
            return frozenset(Role(row["role"]) for row in rows)

    async def assign_role(self, user_id: str, role: Role) -> RoleAssignment:
        role = Role(role)
        async with database_write("assign_role") as conn:
            cursor = await conn.execute(
                "INSERT OR IGNORE INTO user_roles (user_id, role) VALUES (?, ?)",
                (user_id, role.value),
            )
            granted = cursor.rowcount > 0
        if granted:
            logger.info("role_granted", user_id=user_id, role=role.value)
        return RoleAssignment(user_id=user_id, role=role)

    async def revoke_role(self, user_id: str, role: Role) -> bool:
        role = Role(role)
        async with database_write("revoke_role") as conn:
            cursor = await conn.execute(
                "DELETE FROM user_roles WHERE user_id = ? AND role = ?",
                (user_id, role.value),
            )
            revoked = cursor.rowcount > 0
        if revoked:
            logger.info("role_revoked", user_id=user_id, role=role.value)
        return revoked

    async def list_assignments(self) -> list[RoleAssignment]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT user_id, role FROM user_roles ORDER BY user_id, role"
            )
            rows = await cursor.fetchall()
            return [RoleAssignment(user_id=row["user_id"], role=Role(row["role"])) for row in rows]
