"""Pluggable authentication strategies.

Exactly one strategy is built at startup from settings.auth_strategy and
stored on app.state; request handling never branches on configuration.
The settings validator refuses trusted_header in production, so a
misconfiguration fails at startup instead of silently trusting headers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from starlette.requests import Request

from tenantguard.core.config import AUTH_STRATEGY_TRUSTED_HEADER, Settings
from tenantguard.core.tenant_validation import is_valid_identifier
from tenantguard.infrastructure.security.jwt import InvalidSessionToken, read_session_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Authenticated actor and the tenant it claims to act in (may be None)."""

    actor_id: str
    claimed_tenant_id: str | None = None


class AuthenticationStrategy(Protocol):
    name: str

    async def authenticate(self, request: Request) -> Principal | None:
        """Return the principal, or None when the request carries no valid identity."""
        ...


def _header(request: Request, name: str) -> str | None:
    value = request.headers.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


class TrustedHeaderAuthentication:
    """Trusts X-Actor-ID / X-Tenant-ID as set by an upstream gateway. Never for production."""

    name = "trusted_header"

    def __init__(self, actor_header: str, tenant_header: str) -> None:
        self.actor_header = actor_header
        self.tenant_header = tenant_header

    async def authenticate(self, request: Request) -> Principal | None:
        actor_id = _header(request, self.actor_header)
        if not actor_id:
            return None
        if not is_valid_identifier(actor_id):
            logger.warning("Rejected malformed %s header", self.actor_header)
            return None
        return Principal(actor_id=actor_id, claimed_tenant_id=_header(request, self.tenant_header))


class VerifiedSessionAuthentication:
    """Bearer JWT: sub is the actor id, tenant_id claim (or tenant header) the claimed tenant."""

    name = "verified_session"

    def __init__(self, tenant_header: str) -> None:
        self.tenant_header = tenant_header

    async def authenticate(self, request: Request) -> Principal | None:
        authorization = request.headers.get("Authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        try:
            claims = read_session_token(token.strip())
        except InvalidSessionToken as e:
            logger.info("Bearer token rejected: %s", e)
            return None
        claimed = claims.tenant_id or _header(request, self.tenant_header)
        return Principal(actor_id=claims.actor_id, claimed_tenant_id=claimed)


def build_authentication_strategy(settings: Settings) -> AuthenticationStrategy:
    """Build the strategy named by settings.auth_strategy (validated at settings load)."""
    if settings.auth_strategy == AUTH_STRATEGY_TRUSTED_HEADER:
        logger.warning(
            "Authentication strategy is trusted_header (environment=%s); "
            "actor identity is taken from %s without verification",
            settings.environment,
            settings.actor_header_name,
        )
        return TrustedHeaderAuthentication(
            settings.actor_header_name, settings.tenant_header_name
        )
    return VerifiedSessionAuthentication(settings.tenant_header_name)
