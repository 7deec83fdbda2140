"""
Role-based access policy.

Every write path calls `AccessPolicy.require` before touching storage.
Reads and stock adjustments need only an authenticated actor; catalog
maintenance needs a manager or admin; deletes and role management are
admin-only.
"""

from enum import Enum

from matinv.config import get_logger
from matinv.core.entities.actor import Actor, Role
from matinv.core.exceptions import PermissionDeniedError, UnauthenticatedError

logger = get_logger(__name__)


class Action(str, Enum):
    """Operations subject to access control."""

    READ = "read"
    ADJUST_STOCK = "adjust stock"
    CREATE_MATERIAL = "create material"
    UPDATE_MATERIAL = "update material"
    DELETE_MATERIAL = "delete material"
    MANAGE_SUPPLIERS = "manage suppliers"
    DELETE_SUPPLIER = "delete supplier"
    MANAGE_WAREHOUSES = "manage warehouses"
    DELETE_WAREHOUSE = "delete warehouse"
    MANAGE_ROLES = "manage roles"


ELEVATED = frozenset({Role.ADMIN, Role.MANAGER})
ADMIN_ONLY = frozenset({Role.ADMIN})

# None means any authenticated actor
REQUIRED_ROLES: dict[Action, frozenset[Role] | None] = {
    Action.READ: None,
    Action.ADJUST_STOCK: None,
    Action.CREATE_MATERIAL: ELEVATED,
    Action.UPDATE_MATERIAL: ELEVATED,
    Action.DELETE_MATERIAL: ADMIN_ONLY,
    Action.MANAGE_SUPPLIERS: ELEVATED,
    Action.DELETE_SUPPLIER: ADMIN_ONLY,
    Action.MANAGE_WAREHOUSES: ELEVATED,
    Action.DELETE_WAREHOUSE: ADMIN_ONLY,
    Action.MANAGE_ROLES: ADMIN_ONLY,
}


class AccessPolicy:
    """Checks an actor against the roles an action requires."""

    def __init__(self, required_roles: dict[Action, frozenset[Role] | None] | None = None):
        self._required_roles = required_roles or REQUIRED_ROLES

    def allows(self, actor: Actor | None, action: Action) -> bool:
        if actor is None:
            return False
        required = self._required_roles[action]
        return required is None or actor.has_any_role(required)

    def require(self, actor: Actor | None, action: Action) -> Actor:
        """
        Return the actor if it may perform the action.

        Raises:
            UnauthenticatedError: No actor.
            PermissionDeniedError: Actor lacks every role the action accepts.
        """
        if actor is None:
            raise UnauthenticatedError(action.value)

        if not self.allows(actor, action):
            required = sorted(r.value for r in self._required_roles[action] or ())
            logger.warning(
                "permission_denied",
                user_id=actor.user_id,
                action=action.value,
                roles=sorted(r.value for r in actor.roles),
            )
            raise PermissionDeniedError(actor.user_id, action.value, required)

        return actor


_policy = AccessPolicy()


def get_access_policy() -> AccessPolicy:
    """Get the process-wide access policy."""
    return _policy
