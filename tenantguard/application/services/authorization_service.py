"""Authorization service: per-request, per-tenant permission decisions.

Every check re-resolves role and permission state from the store; nothing is
cached between requests. The decision is union-of-roles with no explicit
deny, and any failure while consulting the store denies (fail closed).
Every decision is handed to the audit emitter before it is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any, TypeVar

from tenantguard.application.dtos import AuditEvent
from tenantguard.application.interfaces.services import IAuditEmitter, IGrantResolver
from tenantguard.domain.authorization import AuthorizationDecision, decide
from tenantguard.shared.enums import AuditOutcome, DenyReason
from tenantguard.shared.telemetry.tracing import add_span_attributes, set_span_error, traced

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DECISION_OUTCOME = {
    DenyReason.AUTH_REQUIRED: AuditOutcome.DENY,
    DenyReason.NO_ROLES: AuditOutcome.DENY,
    DenyReason.PERMISSION_DENIED: AuditOutcome.DENY,
    DenyReason.INTERNAL_ERROR: AuditOutcome.INTERNAL_ERROR,
}


def _log_store_failure(
    error: Exception,
    step: str,
    actor_id: str | None,
    tenant_id: str | None,
    feature_area: str,
    action_type: str,
) -> None:
    set_span_error(error)
    logger.error(
        "Authorization %s failed; denying actor=%s tenant=%s permission=%s:%s",
        step,
        actor_id,
        tenant_id,
        feature_area,
        action_type,
        exc_info=error,
    )


@dataclass(frozen=True)
class AuthorizationContext:
    """Who was allowed to do what, where. Returned by require()."""

    actor_id: str
    tenant_id: str
    feature_area: str
    action_type: str

    @property
    def subject(self) -> str:
        return f"{self.feature_area}:{self.action_type}"


class AuthorizationService:
    """Decides authorize(actor, tenant, feature_area, action_type) and guards operations."""

    def __init__(
        self,
        grant_resolver: IGrantResolver,
        audit_emitter: IAuditEmitter | None = None,
        *,
        record_allow_decisions: bool = True,
    ) -> None:
        self.grant_resolver = grant_resolver
        self.audit_emitter = audit_emitter
        self.record_allow_decisions = record_allow_decisions

    @traced("authorization.authorize")
    async def authorize(
        self,
        actor_id: str | None,
        tenant_id: str | None,
        feature_area: str,
        action_type: str,
    ) -> AuthorizationDecision:
        """Return Allow or Deny(reason). Never raises for store failures."""
        decision = await self._evaluate(actor_id, tenant_id, feature_area, action_type)
        add_span_attributes(
            **{
                "tenantguard.permission": f"{feature_area}:{action_type}",
                "authz.allowed": decision.allowed,
                "authz.reason": decision.reason.value if decision.reason else None,
            }
        )
        await self._record_decision(
            decision, actor_id, tenant_id, feature_area, action_type
        )
        return decision

    async def _evaluate(
        self,
        actor_id: str | None,
        tenant_id: str | None,
        feature_area: str,
        action_type: str,
    ) -> AuthorizationDecision:
        if not actor_id or not actor_id.strip():
            return AuthorizationDecision.deny(DenyReason.AUTH_REQUIRED)
        if not tenant_id:
            return AuthorizationDecision.deny(DenyReason.NO_ROLES)
        try:
            lookup = await self.grant_resolver.lookup(
                actor_id, tenant_id, feature_area, action_type
            )
        except Exception as e:
            _log_store_failure(e, "grant lookup", actor_id, tenant_id, feature_area, action_type)
            return AuthorizationDecision.deny(DenyReason.INTERNAL_ERROR)
        return decide(lookup)

    async def deny_internal_error(
        self,
        error: Exception,
        actor_id: str | None,
        tenant_id: str | None,
        feature_area: str,
        action_type: str,
        *,
        step: str,
    ) -> AuthorizationDecision:
        """Fail closed for a store error raised before the grant lookup (e.g. tenant resolution).

        Logged and audited exactly like a failed lookup; the caller raises
        decision.to_exception().
        """
        _log_store_failure(error, step, actor_id, tenant_id, feature_area, action_type)
        decision = AuthorizationDecision.deny(DenyReason.INTERNAL_ERROR)
        await self._record_decision(
            decision, actor_id, tenant_id, feature_area, action_type
        )
        return decision

    async def _record_decision(
        self,
        decision: AuthorizationDecision,
        actor_id: str | None,
        tenant_id: str | None,
        feature_area: str,
        action_type: str,
    ) -> None:
        if self.audit_emitter is None:
            return
        if decision.allowed and not self.record_allow_decisions:
            return
        outcome = (
            AuditOutcome.ALLOW
            if decision.allowed
            else _DECISION_OUTCOME[decision.reason]  # type: ignore[index]
        )
        metadata: dict[str, Any] = {"action_type": action_type}
        if decision.reason is not None:
            metadata["reason"] = decision.reason.value
        await self.audit_emitter.record(
            AuditEvent(
                subject=f"{feature_area}:{action_type}",
                outcome=outcome,
                actor_id=actor_id or None,
                tenant_id=tenant_id or None,
                feature_area=feature_area,
                metadata=metadata,
            )
        )

    async def require(
        self,
        actor_id: str | None,
        tenant_id: str | None,
        feature_area: str,
        action_type: str,
    ) -> AuthorizationContext:
        """Authorize or raise the boundary exception for the Deny reason."""
        decision = await self.authorize(actor_id, tenant_id, feature_area, action_type)
        if not decision.allowed:
            raise decision.to_exception(feature_area, action_type)
        # An Allow implies both identifiers were present.
        return AuthorizationContext(str(actor_id), str(tenant_id), feature_area, action_type)

    async def record_outcome(
        self,
        context: AuthorizationContext,
        outcome: AuditOutcome,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Record success/failure of an operation that ran after an Allow."""
        if self.audit_emitter is None:
            return
        await self.audit_emitter.record(
            AuditEvent(
                subject=context.subject,
                outcome=outcome,
                actor_id=context.actor_id,
                tenant_id=context.tenant_id,
                feature_area=context.feature_area,
                metadata={"action_type": context.action_type, **(metadata or {})},
            )
        )

    async def run_guarded(
        self,
        actor_id: str | None,
        tenant_id: str | None,
        feature_area: str,
        action_type: str,
        operation: Callable[[AuthorizationContext], Awaitable[T]],
    ) -> T:
        """Authorize, then run operation(context). On Deny the operation is never invoked."""
        context = await self.require(actor_id, tenant_id, feature_area, action_type)
        try:
            result = await operation(context)
        except Exception as exc:
            await self.record_outcome(
                context, AuditOutcome.FAILURE, {"error": type(exc).__name__}
            )
            raise
        await self.record_outcome(context, AuditOutcome.SUCCESS)
        return result

    def guard(
        self, feature_area: str, action_type: str
    ) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
        """Decorator: the wrapped coroutine function takes (context, *args, **kwargs).

        The decorated callable takes (actor_id, tenant_id, *args, **kwargs).
        """

        def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
            @wraps(func)
            async def wrapper(
                actor_id: str | None, tenant_id: str | None, *args: Any, **kwargs: Any
            ) -> T:
                return await self.run_guarded(
                    actor_id,
                    tenant_id,
                    feature_area,
                    action_type,
                    lambda context: func(context, *args, **kwargs),
                )

            return wrapper

        return decorator
