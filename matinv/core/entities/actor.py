"""Authenticated actor and role entities."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Application roles, most privileged first."""

    ADMIN = "admin"
    MANAGER = "manager"
    OPERATOR = "operator"


class Actor(BaseModel):
    """The authenticated user performing an operation."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    roles: frozenset[Role] = frozenset()

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    def has_any_role(self, roles: set[Role] | frozenset[Role]) -> bool:
        return bool(self.roles & roles)

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    @property
    def is_elevated(self) -> bool:
        """Admins and managers."""
        return self.has_any_role({Role.ADMIN, Role.MANAGER})


class RoleAssignment(BaseModel):
    """A role granted to a user."""

    user_id: str
    role: Role
