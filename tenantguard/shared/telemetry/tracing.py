"""Span helpers for authorization, role and audit operations."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

_tracer = trace.get_tracer("tenantguard")

# Identifiers only; payloads and metadata never go on a span.
SPAN_ARGUMENTS = (
    "tenant_id",
    "actor_id",
    "role_id",
    "feature_area",
    "action_type",
    "retention_days",
)


P = ParamSpec("P")
R = TypeVar("R")


def traced(
    span_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Run a coroutine inside a span named ``span_name``.

    Keyword arguments listed in SPAN_ARGUMENTS become ``tenantguard.<name>``
    attributes. An escaping exception marks the span as failed and is re-raised.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with _tracer.start_as_current_span(span_name) as span:
                for name in SPAN_ARGUMENTS:
                    value = kwargs.get(name)
                    if value is not None:
                        span.set_attribute(f"tenantguard.{name}", str(value))
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _mark_failed(span, e)
                    raise

        return wrapper

    return decorator


def _mark_failed(span: trace.Span, exc: BaseException) -> None:
    span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
    span.record_exception(exc)


def add_span_attributes(**attributes: Any) -> None:
    """Attach attributes to the active span, skipping None values."""
    span = trace.get_current_span()
    if not span.is_recording():
        return
    for key, value in attributes.items():
        if value is not None:
            span.set_attribute(key, value)


def set_span_error(exc: BaseException) -> None:
    span = trace.get_current_span()
    if span.is_recording():
        _mark_failed(span, exc)


def get_trace_id() -> str | None:
    """Hex trace id of the active span, for correlating audit records."""
    ctx = trace.get_current_span().get_span_context()
    return format(ctx.trace_id, "032x") if ctx.is_valid else None
