"""Current user and role management endpoints."""

from fastapi import APIRouter, Depends, status

from matinv.api.dependencies import get_current_actor, get_policy, get_role_store
from matinv.application.dto.responses import (
    ActorResponse,
    ErrorResponse,
    RoleAssignmentListResponse,
    RoleAssignmentResponse,
)
from matinv.application.policies import AccessPolicy, Action
from matinv.config import get_logger
from matinv.core.entities.actor import Actor, Role
from matinv.core.exceptions import NotFoundError
from matinv.core.interfaces import IUserRoleStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=ActorResponse)
async def current_user(actor: Actor = Depends(get_current_actor)) -> ActorResponse:
    """The authenticated user and their roles."""
    return ActorResponse(
        user_id=actor.user_id,
        roles=sorted(r.value for r in actor.roles),
        is_admin=actor.is_admin,
        is_elevated=actor.is_elevated,
    )


@router.get(
    "/roles",
    response_model=RoleAssignmentListResponse,
    responses={403: {"model": ErrorResponse}},
)
async def list_role_assignments(
    actor: Actor = Depends(get_current_actor),
    store: IUserRoleStore = Depends(get_role_store),
    policy: AccessPolicy = Depends(get_policy),
) -> RoleAssignmentListResponse:
    """All role assignments. Requires admin."""
    policy.require(actor, Action.MANAGE_ROLES)
    assignments = await store.list_assignments()
    return RoleAssignmentListResponse(
        assignments=[
            RoleAssignmentResponse(user_id=a.user_id, role=a.role.value) for a in assignments
        ],
        total=len(assignments),
    )


@router.put(
    "/{user_id}/roles/{role}",
    response_model=RoleAssignmentResponse,
    responses={403: {"model": ErrorResponse}},
)
async def grant_role(
    user_id: str,
    role: Role,
    actor: Actor = Depends(get_current_actor),
    store: IUserRoleStore = Depends(get_role_store),
    policy: AccessPolicy = Depends(get_policy),
) -> RoleAssignmentResponse:
    """Grant a role. Granting a role the user already has is a no-op. Requires admin."""
    policy.require(actor, Action.MANAGE_ROLES)
    assignment = await store.assign_role(user_id, role)
    logger.info("role_assignment_requested", user_id=user_id, role=role.value, by=actor.user_id)
    return RoleAssignmentResponse(user_id=assignment.user_id, role=assignment.role.value)


@router.delete(
    "/{user_id}/roles/{role}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def revoke_role(
    user_id: str,
    role: Role,
    actor: Actor = Depends(get_current_actor),
    store: IUserRoleStore = Depends(get_role_store),
    policy: AccessPolicy = Depends(get_policy),
) -> None:
    """Revoke a role. Requires admin."""
    policy.require(actor, Action.MANAGE_ROLES)
    if not await store.revoke_role(user_id, role):
        raise NotFoundError(
            f"User {user_id} does not have role {role.value}",
            code="ROLE_ASSIGNMENT_NOT_FOUND",
            details={"user_id": user_id, "role": role.value},
        )
