"""Tenant resolution dependency."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.interfaces.services import ITenantResolver
from tenantguard.infrastructure.persistence.database import get_db
from tenantguard.infrastructure.security.tenant_resolver import PrincipalTenantResolver


async def get_tenant_resolver(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ITenantResolver:
    return PrincipalTenantResolver(db)
