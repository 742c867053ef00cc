"""DTOs for tenants."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantResult:
    id: str
    code: str
    name: str
    status: str
