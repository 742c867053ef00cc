"""Pure authorization decision (union of roles, fail closed).

The store lookup produces a GrantLookup snapshot; decide() turns it into an
AuthorizationDecision with no I/O. Keeping the two apart lets the decision
rules be tested exhaustively without a database.
"""

from dataclasses import dataclass

from tenantguard.domain.exceptions import (
    AuthRequiredException,
    InternalErrorException,
    NoRolesAssignedException,
    PermissionDeniedException,
    TenantGuardException,
)
from tenantguard.shared.enums import DenyReason


@dataclass(frozen=True)
class GrantLookup:
    """Facts about one (actor, tenant, feature_area, action_type), read in one round-trip.

    role_count: roles the actor holds in the tenant (assignments in other
        tenants are never counted).
    permission_exists: the pair is in the catalog.
    granted: at least one of those roles carries the permission.
    """

    role_count: int
    permission_exists: bool
    granted: bool


@dataclass(frozen=True)
class AuthorizationDecision:
    """Allow, or Deny with a reason. Construct via allow() / deny()."""

    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> "AuthorizationDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "AuthorizationDecision":
        return cls(allowed=False, reason=reason)

    def to_exception(
        self, feature_area: str | None = None, action_type: str | None = None
    ) -> TenantGuardException:
        """Return the boundary exception for a Deny. Raises ValueError on Allow."""
        if self.allowed or self.reason is None:
            raise ValueError("An Allow decision has no exception")
        if self.reason is DenyReason.AUTH_REQUIRED:
            return AuthRequiredException()
        if self.reason is DenyReason.NO_ROLES:
            return NoRolesAssignedException(feature_area, action_type)
        if self.reason is DenyReason.INTERNAL_ERROR:
            return InternalErrorException()
        return PermissionDeniedException(feature_area, action_type)


def decide(lookup: GrantLookup) -> AuthorizationDecision:
    """Apply the decision rules to a lookup for an authenticated actor.

    Order matters: no roles beats unknown permission, and an unknown
    permission is denied even if `granted` were somehow set.
    """
    if lookup.role_count <= 0:
        return AuthorizationDecision.deny(DenyReason.NO_ROLES)
    if not lookup.permission_exists:
        return AuthorizationDecision.deny(DenyReason.PERMISSION_DENIED)
    if lookup.granted:
        return AuthorizationDecision.allow()
    return AuthorizationDecision.deny(DenyReason.PERMISSION_DENIED)
