"""Application services: authorization, role assignment, change log, audit trail."""

from clinic_access.application.services.audit_query_service import AuditQueryService
from clinic_access.application.services.audit_recorder import AuditRecorder
from clinic_access.application.services.authorization_service import AuthorizationService
from clinic_access.application.services.change_log import (
    FieldChange,
    change_log_to_dict,
    create_change_log,
)
from clinic_access.application.services.permission_service import PermissionService
from clinic_access.application.services.rbac_seed_service import RbacSeedService
from clinic_access.application.services.resource_name_resolver import (
    ResourceNameResolver,
)
from clinic_access.application.services.role_assignment_service import (
    RoleAssignmentService,
)
from clinic_access.application.services.role_service import RoleService

__all__ = [
    "AuditQueryService",
    "AuditRecorder",
    "AuthorizationService",
    "FieldChange",
    "PermissionService",
    "RbacSeedService",
    "ResourceNameResolver",
    "RoleAssignmentService",
    "RoleService",
    "change_log_to_dict",
    "create_change_log",
]
