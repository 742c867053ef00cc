"""Logging configuration for the service."""

import logging
import sys

from tenantguard.core.config import get_settings
from tenantguard.core.tenant_context import get_tenant_id
from tenantguard.shared.context import get_current_actor_id, get_request_id

# Audit sink failures are reported here. Operators alert on CRITICAL from this name.
AUDIT_FAILURE_LOGGER = "tenantguard.audit"

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[req=%(request_id)s tenant=%(tenant_id)s actor=%(actor_id)s] %(message)s"
)


class RequestContextFilter(logging.Filter):
    """Add request_id, tenant_id and actor_id from the request context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.tenant_id = get_tenant_id() or "-"
        record.actor_id = get_current_actor_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout; every line carries the request context.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
