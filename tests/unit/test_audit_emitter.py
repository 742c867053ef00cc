"""Unit tests for AuditEmitter: redaction, correlation ids, and sink failure handling."""

import logging

from tenantguard.application.dtos import AuditEvent
from tenantguard.application.services.audit_emitter import AuditEmitter
from tenantguard.shared.context import set_request_id
from tenantguard.shared.enums import AuditOutcome
from tenantguard.shared.telemetry.logging import AUDIT_FAILURE_LOGGER
from tenantguard.shared.utils.redaction import REDACTED


def _event(**metadata) -> AuditEvent:
    return AuditEvent(
        subject="clients:edit",
        outcome=AuditOutcome.SUCCESS,
        actor_id="u1",
        tenant_id="t1",
        feature_area="clients",
        metadata=metadata,
    )


async def test_metadata_is_redacted_before_it_reaches_the_sink(audit_sink) -> None:
    original = {"password": "hunter2", "body": {"api_key": "k", "name": "Acme"}}
    stored = await AuditEmitter(audit_sink).record(_event(**original))
    assert stored is not None
    (event,) = audit_sink.events
    assert event.metadata["password"] == REDACTED
    assert event.metadata["body"] == {"api_key": REDACTED, "name": "Acme"}
    assert original["password"] == "hunter2"


async def test_timestamp_and_request_id_are_filled_in(audit_sink) -> None:
    set_request_id("req-123")
    await AuditEmitter(audit_sink).record(_event())
    (event,) = audit_sink.events
    assert event.timestamp is not None
    assert event.timestamp.tzinfo is not None
    assert event.metadata["request_id"] == "req-123"


async def test_sink_failure_is_logged_at_critical_and_swallowed(
    failing_audit_sink, caplog
) -> None:
    with caplog.at_level(logging.CRITICAL, logger=AUDIT_FAILURE_LOGGER):
        result = await AuditEmitter(failing_audit_sink).record(_event(token="abc"))
    assert result is None
    records = [r for r in caplog.records if r.name == AUDIT_FAILURE_LOGGER]
    assert len(records) == 1
    assert records[0].levelno == logging.CRITICAL
    message = records[0].getMessage()
    assert "clients:edit" in message
    assert "success" in message
    # The fallback log carries the redacted metadata only.
    assert "abc" not in message
