"""Authentication strategies (trusted header, verified session) and tenant resolution."""

from tenantguard.infrastructure.security.authentication import (
    AuthenticationStrategy,
    Principal,
    TrustedHeaderAuthentication,
    VerifiedSessionAuthentication,
    build_authentication_strategy,
)
from tenantguard.infrastructure.security.tenant_resolver import PrincipalTenantResolver

__all__ = [
    "AuthenticationStrategy",
    "Principal",
    "PrincipalTenantResolver",
    "TrustedHeaderAuthentication",
    "VerifiedSessionAuthentication",
    "build_authentication_strategy",
]
