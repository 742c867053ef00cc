"""Tenant context for the current request.

The guard binds the resolved tenant here once authorization passes so
logs, traces and audit metadata emitted further down the call stack can
be correlated without threading tenant_id through every signature.
Data access never reads it: repositories always take tenant_id explicitly.
"""

from contextvars import ContextVar

current_tenant_id: ContextVar[str | None] = ContextVar(
    "current_tenant_id", default=None
)


def set_tenant_id(tenant_id: str | None) -> None:
    """Set the current tenant ID for this context (e.g. request)."""
    current_tenant_id.set(tenant_id)


def get_tenant_id() -> str | None:
    """Return the current tenant ID if set."""
    return current_tenant_id.get()
