"""Domain exceptions for tenantguard.

Defines domain-level exceptions that represent authorization outcomes and
role-management rule violations. These exceptions are independent of
infrastructure concerns. The presentation layer maps them to HTTP responses
in tenantguard.core.exception_handlers via error_code.
"""

from typing import Any

GENERIC_ACCESS_DENIED_MESSAGE = "Access denied"
GENERIC_INTERNAL_ERROR_MESSAGE = "Internal server error"


class TenantGuardException(Exception):
    """Base exception for all tenantguard errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the response body for this error."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(TenantGuardException):
    """Raised when input validation fails (e.g. invalid format or unknown filter)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthRequiredException(TenantGuardException):
    """Raised when no actor identity is present.

    Never carries details about what was being accessed.
    """

    def __init__(self) -> None:
        super().__init__("Authentication required", "AUTH_REQUIRED")


class AccessDeniedException(TenantGuardException):
    """Base for authorization denials (actor identified but lacking a grant).

    The message is deliberately generic and details are never rendered, so a
    caller cannot enumerate feature areas or permissions. The feature area
    and action are kept on attributes for logging and audit only.
    """

    def __init__(
        self,
        error_code: str,
        feature_area: str | None = None,
        action_type: str | None = None,
    ) -> None:
        self.feature_area = feature_area
        self.action_type = action_type
        super().__init__(GENERIC_ACCESS_DENIED_MESSAGE, error_code)

    def to_dict(self) -> dict[str, Any]:
        return {"error": "ACCESS_DENIED", "message": self.message}


class PermissionDeniedException(AccessDeniedException):
    """Raised when the actor's roles in the tenant do not grant the permission."""

    def __init__(self, feature_area: str | None = None, action_type: str | None = None) -> None:
        super().__init__("PERMISSION_DENIED", feature_area, action_type)


class NoRolesAssignedException(AccessDeniedException):
    """Raised when the actor holds no role at all in the tenant."""

    def __init__(self, feature_area: str | None = None, action_type: str | None = None) -> None:
        super().__init__("NO_ROLES_ASSIGNED", feature_area, action_type)


class ResourceNotFoundException(TenantGuardException):
    """Raised when a record is absent or belongs to another tenant.

    The two cases are intentionally indistinguishable to the caller.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and identifier.

        Args:
            resource_type: Type of resource (e.g. 'role', 'client').
            resource_id: Identifier that was looked up.
        """
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateNameException(TenantGuardException):
    """Raised when a role name already exists in the tenant (case-insensitive)."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"A role named '{name}' already exists in this organization",
            "DUPLICATE_NAME",
            {"name": name},
        )


class RoleInUseException(TenantGuardException):
    """Raised when deleting a role that at least one actor still holds."""

    def __init__(self, role_id: str, holder_count: int | None = None) -> None:
        details: dict[str, Any] = {"role_id": role_id}
        if holder_count is not None:
            details["holder_count"] = holder_count
        super().__init__(
            "Role is assigned to one or more users; revoke it before deleting",
            "ROLE_IN_USE",
            details,
        )


class ProtectedRoleException(TenantGuardException):
    """Raised when an edit would change a default role's name or permission set, or delete it."""

    def __init__(self, role_id: str, reason: str) -> None:
        super().__init__(
            f"Default roles cannot be modified: {reason}",
            "PROTECTED_ROLE",
            {"role_id": role_id},
        )


class TenantAlreadyExistsException(TenantGuardException):
    """Raised when creating a tenant whose code already exists."""

    def __init__(self, code: str) -> None:
        super().__init__(
            f"Tenant with code '{code}' already exists",
            "TENANT_ALREADY_EXISTS",
            {"code": code},
        )


class InternalErrorException(TenantGuardException):
    """Raised when the authorization store cannot be consulted. Always fails closed."""

    def __init__(self) -> None:
        super().__init__(GENERIC_INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR")

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error_code, "message": self.message}
