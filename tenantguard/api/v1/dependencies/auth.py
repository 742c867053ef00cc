"""Authentication dependency: runs the strategy chosen at startup."""

from __future__ import annotations

from fastapi import Request

from tenantguard.infrastructure.security.authentication import (
    AuthenticationStrategy,
    Principal,
)


def get_authentication_strategy(request: Request) -> AuthenticationStrategy:
    """Strategy built by create_app() from settings.auth_strategy."""
    return request.app.state.auth_strategy


async def get_principal(request: Request) -> Principal | None:
    """Authenticated principal, or None. Never raises: the guard turns None into 401."""
    return await get_authentication_strategy(request).authenticate(request)
