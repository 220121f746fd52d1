"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, not on infrastructure directly.
"""

from clinic_access.api.v1.dependencies.audit import (
    get_audit_query_service,
    get_audit_recorder,
    get_resource_name_resolver,
)
from clinic_access.api.v1.dependencies.auth import (
    get_authorization_service,
    get_current_actor_id,
    get_request_context,
    require_permission,
)
from clinic_access.api.v1.dependencies.user_rbac import get_role_assignment_service

__all__ = [
    "get_audit_query_service",
    "get_audit_recorder",
    "get_authorization_service",
    "get_current_actor_id",
    "get_request_context",
    "get_resource_name_resolver",
    "get_role_assignment_service",
    "require_permission",
]
