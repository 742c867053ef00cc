"""Permissions API: read-only view of the global catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tenantguard.api.v1.dependencies import get_permission_catalog_service, guard
from tenantguard.application.services.authorization_service import AuthorizationContext
from tenantguard.application.services.permission_service import PermissionCatalogService
from tenantguard.schemas.permission import PermissionResponse

router = APIRouter()


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    _: Annotated[AuthorizationContext, Depends(guard("roles", "view"))],
    catalog: Annotated[PermissionCatalogService, Depends(get_permission_catalog_service)],
):
    """Every (feature_area, action_type) pair a role can be granted."""
    return [PermissionResponse.model_validate(p) for p in await catalog.list_permissions()]
