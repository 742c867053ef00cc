"""Audit records API: query the caller's tenant's audit trail, newest first."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tenantguard.api.v1.dependencies import get_audit_query_service, guard
from tenantguard.application.dtos import AuditQuery
from tenantguard.application.services.audit_query_service import AuditQueryService
from tenantguard.application.services.authorization_service import AuthorizationContext
from tenantguard.schemas.audit_record import AuditRecordResponse
from tenantguard.shared.enums import AuditOutcome

router = APIRouter()


@router.get("", response_model=list[AuditRecordResponse])
async def query_audit_records(
    context: Annotated[AuthorizationContext, Depends(guard("settings", "view"))],
    audit_svc: Annotated[AuditQueryService, Depends(get_audit_query_service)],
    actor_id: str | None = None,
    feature_area: str | None = None,
    subject: str | None = None,
    outcome: AuditOutcome | None = None,
    since: datetime | None = None,
    until: datetime | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """Filter by actor, feature area, subject, outcome and [since, until)."""
    records = await audit_svc.query(
        AuditQuery(
            tenant_id=context.tenant_id,
            actor_id=actor_id,
            feature_area=feature_area,
            subject=subject,
            outcome=outcome,
            since=since,
            until=until,
            skip=skip,
            limit=limit,
        )
    )
    return [AuditRecordResponse.model_validate(r) for r in records]
