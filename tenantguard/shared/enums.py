"""Shared enumerations (audit outcomes and decision reasons).

Domain enums such as ActionType live in tenantguard.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditOutcome(_ValuesMixin, str, Enum):
    """Outcome stored on an AuditRecord.

    allow/deny/internal_error describe an authorization decision;
    success/failure describe the guarded operation that followed an allow.
    """

    ALLOW = "allow"
    DENY = "deny"
    INTERNAL_ERROR = "internal_error"
    SUCCESS = "success"
    FAILURE = "failure"


class DenyReason(_ValuesMixin, str, Enum):
    """Internal reason for a Deny. Only the audit trail sees the distinction."""

    AUTH_REQUIRED = "AUTH_REQUIRED"
    NO_ROLES = "NO_ROLES"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
