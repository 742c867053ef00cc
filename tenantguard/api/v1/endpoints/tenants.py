"""Tenant bootstrap API: create a tenant, its default roles and the owner's Admin grant."""

import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException

from tenantguard.api.v1.dependencies import get_tenant_creation_service
from tenantguard.application.services.tenant_creation_service import TenantCreationService
from tenantguard.core.config import get_settings
from tenantguard.schemas.tenant import TenantCreate, TenantCreateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def require_create_tenant_secret(
    x_create_tenant_secret: Annotated[str | None, Header()] = None,
) -> None:
    """Tenant creation has no tenant yet to authorize against; a shared secret stands in.

    Settings must define CREATE_TENANT_SECRET and the request must send it
    in X-Create-Tenant-Secret.
    """
    settings = get_settings()
    if settings.create_tenant_secret is None:
        raise HTTPException(
            status_code=503,
            detail="Tenant creation is not configured (CREATE_TENANT_SECRET is not set).",
        )
    expected = settings.create_tenant_secret.get_secret_value()
    if not x_create_tenant_secret or not hmac.compare_digest(
        x_create_tenant_secret.encode(), expected.encode()
    ):
        logger.warning("Rejected tenant creation: bad or missing X-Create-Tenant-Secret")
        raise HTTPException(status_code=401, detail="Unauthorized tenant creation")


@router.post(
    "",
    response_model=TenantCreateResponse,
    status_code=201,
    dependencies=[Depends(require_create_tenant_secret)],
)
async def create_tenant(
    body: TenantCreate,
    tenant_svc: Annotated[TenantCreationService, Depends(get_tenant_creation_service)],
):
    """Create a tenant; the owner actor is granted the Admin role."""
    result = await tenant_svc.create_tenant(
        code=body.code, name=body.name, owner_actor_id=body.owner_actor_id
    )
    return TenantCreateResponse(
        tenant_id=result.tenant.id,
        code=result.tenant.code,
        name=result.tenant.name,
        owner_role_id=result.owner_role.id,
        default_role_ids={name: role.id for name, role in result.default_roles.items()},
    )
