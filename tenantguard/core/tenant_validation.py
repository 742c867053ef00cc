"""Format validation for tenant and actor identifiers received at the boundary."""

import re

from tenantguard.domain.exceptions import ValidationException

IDENTIFIER_MAX_LENGTH = 64
_IDENTIFIER_RE = re.compile(r"^[a-zA-Z0-9_.@:-]{1," + str(IDENTIFIER_MAX_LENGTH) + r"}$")


def is_valid_identifier(value: str | None) -> bool:
    """Return True if value is a non-empty, safely loggable identifier."""
    if not value or len(value) > IDENTIFIER_MAX_LENGTH:
        return False
    return bool(_IDENTIFIER_RE.fullmatch(value))


def validate_tenant_id(value: str) -> str:
    """Return value stripped, or raise ValidationException on bad format."""
    candidate = value.strip()
    if not is_valid_identifier(candidate):
        raise ValidationException("Invalid tenant identifier format", field="tenant_id")
    return candidate
