"""RequestContextFilter stamps log records with the request context."""

import logging

from tenantguard.core.tenant_context import set_tenant_id
from tenantguard.shared.context import set_current_actor, set_request_id
from tenantguard.shared.telemetry.logging import RequestContextFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("t", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_adds_context_fields() -> None:
    set_request_id("req-1")
    set_tenant_id("t1")
    set_current_actor("u1")
    record = _record()

    assert RequestContextFilter().filter(record) is True
    assert (record.request_id, record.tenant_id, record.actor_id) == ("req-1", "t1", "u1")
    set_tenant_id(None)


def test_filter_uses_placeholder_outside_a_request() -> None:
    set_tenant_id(None)
    record = _record()
    RequestContextFilter().filter(record)
    assert (record.request_id, record.tenant_id, record.actor_id) == ("-", "-", "-")
