"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, never on infrastructure directly.
Every tenant-scoped route declares guard(feature_area, action_type) first.
"""

from .auth import get_authentication_strategy, get_principal
from .db import get_audit_emitter, get_db, get_db_transactional
from .rbac import get_authorization_service, guard
from .services import (
    get_audit_query_service,
    get_client_repo,
    get_client_repo_for_write,
    get_permission_catalog_service,
    get_role_service,
    get_role_service_for_write,
    get_tenant_creation_service,
)
from .tenant import get_tenant_resolver

__all__ = [
    "get_audit_emitter",
    "get_audit_query_service",
    "get_authentication_strategy",
    "get_authorization_service",
    "get_client_repo",
    "get_client_repo_for_write",
    "get_db",
    "get_db_transactional",
    "get_permission_catalog_service",
    "get_principal",
    "get_role_service",
    "get_role_service_for_write",
    "get_tenant_creation_service",
    "get_tenant_resolver",
    "guard",
]
