"""Audit emitter: redact, persist, and never let an audit failure reach the caller."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from tenantguard.application.dtos import AuditEvent, AuditRecordResult
from tenantguard.application.interfaces.services import IAuditSink
from tenantguard.shared.context import get_request_id
from tenantguard.shared.telemetry.logging import AUDIT_FAILURE_LOGGER
from tenantguard.shared.telemetry.tracing import get_trace_id, traced
from tenantguard.shared.utils.datetime import utc_now
from tenantguard.shared.utils.redaction import redact_sensitive

audit_failure_logger = logging.getLogger(AUDIT_FAILURE_LOGGER)


class AuditEmitter:
    """Writes AuditEvents to a durable sink.

    record() never raises (except CancelledError to its own caller): if the
    sink fails the event is logged at CRITICAL on the tenantguard.audit
    logger and None is returned. The write runs under asyncio.shield, so a
    request cancelled mid-write still gets its record committed.
    """

    def __init__(self, sink: IAuditSink) -> None:
        self._sink = sink

    def _prepare(self, event: AuditEvent) -> AuditEvent:
        metadata = redact_sensitive(dict(event.metadata))
        request_id = get_request_id()
        if request_id and "request_id" not in metadata:
            metadata["request_id"] = request_id
        trace_id = get_trace_id()
        if trace_id and "trace_id" not in metadata:
            metadata["trace_id"] = trace_id
        return replace(event, metadata=metadata, timestamp=event.timestamp or utc_now())

    async def record(self, event: AuditEvent) -> AuditRecordResult | None:
        """Persist event (redacted). Returns the stored record, or None if the sink failed."""
        return await asyncio.shield(self._write(self._prepare(event)))

    @traced("audit.record")
    async def _write(self, event: AuditEvent) -> AuditRecordResult | None:
        try:
            return await self._sink.write(event)
        except Exception:
            audit_failure_logger.critical(
                "Audit record NOT persisted: subject=%s outcome=%s actor=%s tenant=%s metadata=%s",
                event.subject,
                event.outcome.value,
                event.actor_id,
                event.tenant_id,
                event.metadata,
                exc_info=True,
            )
            return None
