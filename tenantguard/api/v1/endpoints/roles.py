"""Roles API: list, get, create, update, delete (tenant-scoped, guarded by roles:*)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tenantguard.api.v1.dependencies import (
    get_role_service,
    get_role_service_for_write,
    guard,
)
from tenantguard.application.services.authorization_service import AuthorizationContext
from tenantguard.application.services.role_service import RoleService
from tenantguard.schemas.role import (
    RoleCreate,
    RoleDetailResponse,
    RoleResponse,
    RoleUpdate,
)

router = APIRouter()


@router.post("", response_model=RoleDetailResponse, status_code=201)
async def create_role(
    context: Annotated[AuthorizationContext, Depends(guard("roles", "create"))],
    body: RoleCreate,
    role_svc: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Create a custom role in the caller's tenant, optionally with permissions."""
    role = await role_svc.create_role(
        context.tenant_id,
        body.name,
        description=body.description,
        permission_ids=body.permission_ids,
    )
    return RoleDetailResponse.from_role(role)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    context: Annotated[AuthorizationContext, Depends(guard("roles", "view"))],
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List roles for the caller's tenant (paginated)."""
    roles = await role_svc.list_roles(context.tenant_id, skip=skip, limit=limit)
    return [RoleResponse.from_result(r) for r in roles]


@router.get("/{role_id}", response_model=RoleDetailResponse)
async def get_role(
    context: Annotated[AuthorizationContext, Depends(guard("roles", "view"))],
    role_id: str,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
):
    """Get a role with its permission ids. Another tenant's role is a 404."""
    return RoleDetailResponse.from_role(await role_svc.get_role(context.tenant_id, role_id))


@router.patch("/{role_id}", response_model=RoleDetailResponse)
async def update_role(
    context: Annotated[AuthorizationContext, Depends(guard("roles", "edit"))],
    role_id: str,
    body: RoleUpdate,
    role_svc: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Update name/description; permission_ids, when given, replaces the set."""
    role = await role_svc.update_role(
        context.tenant_id,
        role_id,
        name=body.name,
        description=body.description,
        permission_ids=body.permission_ids,
    )
    return RoleDetailResponse.from_role(role)


@router.delete("/{role_id}", status_code=204)
async def delete_role(
    context: Annotated[AuthorizationContext, Depends(guard("roles", "delete"))],
    role_id: str,
    role_svc: Annotated[RoleService, Depends(get_role_service_for_write)],
) -> None:
    """Delete a custom role nobody holds."""
    await role_svc.delete_role(context.tenant_id, role_id)
