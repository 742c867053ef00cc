"""Authorization dependencies: the AuthorizationService and the guard() route dependency."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tenantguard.application.interfaces.services import ITenantResolver
from tenantguard.application.services.audit_emitter import AuditEmitter
from tenantguard.application.services.authorization_service import (
    AuthorizationContext,
    AuthorizationService,
)
from tenantguard.core.config import get_settings
from tenantguard.core.tenant_context import set_tenant_id
from tenantguard.domain.enums import ActionType
from tenantguard.domain.exceptions import ValidationException
from tenantguard.infrastructure.persistence.database import get_db
from tenantguard.infrastructure.security.authentication import Principal
from tenantguard.infrastructure.services.grant_resolver import GrantResolver
from tenantguard.shared.context import set_current_actor
from tenantguard.shared.enums import AuditOutcome

from .auth import get_principal
from .db import get_audit_emitter
from .tenant import get_tenant_resolver

logger = logging.getLogger(__name__)


async def get_authorization_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    audit_emitter: Annotated[AuditEmitter, Depends(get_audit_emitter)],
) -> AuthorizationService:
    """Build AuthorizationService on the request's read session. No permission cache."""
    settings = get_settings()
    return AuthorizationService(
        GrantResolver(db),
        audit_emitter,
        record_allow_decisions=settings.audit_record_allow_decisions,
    )


async def _resolve_tenant(
    resolver: ITenantResolver, principal: Principal
) -> str | None:
    try:
        return await resolver.resolve(principal.actor_id, principal.claimed_tenant_id)
    except ValidationException as e:
        # A malformed tenant claim is treated as no tenant (denied as NO_ROLES).
        logger.warning("Ignoring invalid tenant claim for actor=%s: %s", principal.actor_id, e)
        return None


def guard(
    feature_area: str, action_type: ActionType | str
) -> Callable[..., AsyncIterator[AuthorizationContext]]:
    """Route dependency: authorize (feature_area, action_type) before the handler runs.

    Declare it as the FIRST dependency of the endpoint so that it is entered
    before, and exited after, the request's transactional session:

        context: Annotated[AuthorizationContext, Depends(guard("roles", "create"))]

    On Deny the matching exception is raised (401/403) and the handler never
    runs. On Allow it yields the AuthorizationContext, then records the
    operation's success or failure once the handler (and its commit) finished.
    """
    action = ActionType(action_type).value

    async def _guard(
        request: Request,
        principal: Annotated[Principal | None, Depends(get_principal)],
        resolver: Annotated[ITenantResolver, Depends(get_tenant_resolver)],
        authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> AsyncIterator[AuthorizationContext]:
        actor_id: str | None = None
        tenant_id: str | None = None
        if principal is not None:
            actor_id = principal.actor_id
            try:
                tenant_id = await _resolve_tenant(resolver, principal)
            except Exception as e:
                decision = await authz.deny_internal_error(
                    e, actor_id, None, feature_area, action, step="tenant resolution"
                )
                raise decision.to_exception(feature_area, action) from e

        context = await authz.require(actor_id, tenant_id, feature_area, action)
        set_current_actor(context.actor_id)
        set_tenant_id(context.tenant_id)

        metadata: dict[str, Any] = {"method": request.method, "path": request.url.path}
        try:
            yield context
        except Exception as exc:
            await authz.record_outcome(
                context, AuditOutcome.FAILURE, {**metadata, "error": type(exc).__name__}
            )
            raise
        await authz.record_outcome(context, AuditOutcome.SUCCESS, metadata)

    _guard.__name__ = f"guard_{feature_area}_{action}"
    return _guard
