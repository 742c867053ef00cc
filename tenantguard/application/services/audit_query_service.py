"""Audit query service: read-only, tenant-pinned, newest first."""

from dataclasses import replace

from tenantguard.application.dtos import AuditQuery, AuditRecordResult
from tenantguard.application.interfaces.repositories import IAuditRecordRepository
from tenantguard.domain.exceptions import ValidationException
from tenantguard.shared.utils.datetime import ensure_utc

MAX_PAGE_SIZE = 500


class AuditQueryService:
    def __init__(self, audit_repo: IAuditRecordRepository) -> None:
        self.audit_repo = audit_repo

    async def query(self, query: AuditQuery) -> list[AuditRecordResult]:
        """Filter by actor, feature area/subject and time range within the caller's tenant.

        since/until are converted to UTC first; naive values are taken as UTC.
        """
        query = replace(query, since=ensure_utc(query.since), until=ensure_utc(query.until))
        if query.since and query.until and query.since >= query.until:
            raise ValidationException("'since' must be earlier than 'until'", field="since")
        if query.limit < 1 or query.limit > MAX_PAGE_SIZE:
            raise ValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        if query.skip < 0:
            raise ValidationException("skip must not be negative", field="skip")
        return await self.audit_repo.query(query)
