"""Request context management using contextvars.

Async-safe storage for request-scoped data: the authenticated actor and
the request id. Read by logging/audit code that has no direct access to the
request. The resolved tenant lives in tenantguard.core.tenant_context.

Usage:
    set_current_actor("user123")
    actor_id = get_current_actor_id()
"""

from contextvars import ContextVar

_current_actor_id: ContextVar[str | None] = ContextVar("current_actor_id", default=None)
_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_current_actor(actor_id: str | None) -> None:
    """Bind the authenticated actor for the rest of this context."""
    _current_actor_id.set(actor_id)


def get_current_actor_id() -> str | None:
    return _current_actor_id.get()


def set_request_id(request_id: str | None) -> None:
    _current_request_id.set(request_id)


def get_request_id() -> str | None:
    return _current_request_id.get()


def clear_context() -> None:
    """Reset actor and request id (used by tests and background jobs)."""
    _current_actor_id.set(None)
    _current_request_id.set(None)
