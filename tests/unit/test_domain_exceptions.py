"""Tests for domain exceptions (error_code, message, details, response body)."""

from tenantguard.domain.exceptions import (
    GENERIC_ACCESS_DENIED_MESSAGE,
    GENERIC_INTERNAL_ERROR_MESSAGE,
    AuthRequiredException,
    DuplicateNameException,
    InternalErrorException,
    NoRolesAssignedException,
    PermissionDeniedException,
    ProtectedRoleException,
    ResourceNotFoundException,
    RoleInUseException,
    TenantGuardException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base TenantGuardException uses class name as error_code when not provided."""
    exc = TenantGuardException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "TenantGuardException"
    assert exc.details == {}
    assert exc.to_dict() == {"error": "TenantGuardException", "message": "Something failed"}


def test_base_exception_custom_error_code_and_details() -> None:
    exc = TenantGuardException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="name")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "name"}
    assert ValidationException("Invalid").details == {}


def test_auth_required_carries_no_details() -> None:
    exc = AuthRequiredException()
    assert exc.error_code == "AUTH_REQUIRED"
    assert exc.to_dict() == {"error": "AUTH_REQUIRED", "message": "Authentication required"}


def test_denials_share_one_generic_body() -> None:
    """PERMISSION_DENIED and NO_ROLES_ASSIGNED must be indistinguishable to the caller."""
    permission = PermissionDeniedException("invoices", "export")
    no_roles = NoRolesAssignedException("invoices", "export")
    assert permission.error_code == "PERMISSION_DENIED"
    assert no_roles.error_code == "NO_ROLES_ASSIGNED"
    assert permission.to_dict() == no_roles.to_dict()
    assert permission.to_dict() == {
        "error": "ACCESS_DENIED",
        "message": GENERIC_ACCESS_DENIED_MESSAGE,
    }
    assert "invoices" not in str(permission.to_dict())
    # Kept for logs and audit only.
    assert permission.feature_area == "invoices"
    assert permission.action_type == "export"


def test_internal_error_is_generic() -> None:
    exc = InternalErrorException()
    assert exc.error_code == "INTERNAL_ERROR"
    assert exc.to_dict() == {"error": "INTERNAL_ERROR", "message": GENERIC_INTERNAL_ERROR_MESSAGE}


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("client", "c-123")
    assert exc.message == "client not found"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "client", "resource_id": "c-123"}


def test_role_rule_violations_are_specific() -> None:
    duplicate = DuplicateNameException("Billing Clerk")
    assert duplicate.error_code == "DUPLICATE_NAME"
    assert "Billing Clerk" in duplicate.message

    in_use = RoleInUseException("r-1", holder_count=2)
    assert in_use.error_code == "ROLE_IN_USE"
    assert in_use.details == {"role_id": "r-1", "holder_count": 2}

    protected = ProtectedRoleException("r-2", "default roles cannot be deleted")
    assert protected.error_code == "PROTECTED_ROLE"
    assert protected.details == {"role_id": "r-2"}
