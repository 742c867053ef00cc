"""Actor-roles API: list, grant and revoke an actor's roles in the caller's tenant."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from tenantguard.api.v1.dependencies import (
    get_role_service,
    get_role_service_for_write,
    guard,
)
from tenantguard.application.services.authorization_service import AuthorizationContext
from tenantguard.application.services.role_service import RoleService
from tenantguard.schemas.assignment import AssignmentResponse, RoleAssign
from tenantguard.schemas.role import RoleDetailResponse

router = APIRouter()


@router.get("/{actor_id}/roles", response_model=list[RoleDetailResponse])
async def list_actor_roles(
    context: Annotated[AuthorizationContext, Depends(guard("users", "view"))],
    actor_id: str,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
):
    """Roles the actor holds in this tenant, each with its permission ids."""
    roles = await role_svc.list_actor_roles(context.tenant_id, actor_id)
    return [RoleDetailResponse.from_role(r) for r in roles]


@router.post("/{actor_id}/roles", response_model=AssignmentResponse, status_code=201)
async def assign_role(
    context: Annotated[AuthorizationContext, Depends(guard("users", "edit"))],
    actor_id: str,
    body: RoleAssign,
    role_svc: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Grant a role. Granting a role the actor already holds returns the existing assignment."""
    assignment = await role_svc.assign_role(
        context.tenant_id, actor_id, body.role_id, granted_by=context.actor_id
    )
    return AssignmentResponse.model_validate(assignment)


@router.delete("/{actor_id}/roles/{role_id}", status_code=204)
async def revoke_role(
    context: Annotated[AuthorizationContext, Depends(guard("users", "edit"))],
    actor_id: str,
    role_id: str,
    role_svc: Annotated[RoleService, Depends(get_role_service_for_write)],
) -> Response:
    """Revoke a role. Revoking a role the actor does not hold is a no-op (still 204)."""
    await role_svc.revoke_role(context.tenant_id, actor_id, role_id)
    return Response(status_code=204)
