"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from clinic_access.infrastructure.
"""

from clinic_access.application.interfaces.repositories import (
    IAuditLogRepository,
    IPermissionRepository,
    IResourceLookupRepository,
    IRolePermissionRepository,
    IRoleRepository,
    IUserProfileRepository,
    IUserRoleRepository,
)
from clinic_access.application.interfaces.services import (
    IPermissionCache,
    IPermissionResolver,
)

__all__ = [
    "IAuditLogRepository",
    "IPermissionCache",
    "IPermissionRepository",
    "IPermissionResolver",
    "IResourceLookupRepository",
    "IRolePermissionRepository",
    "IRoleRepository",
    "IUserProfileRepository",
    "IUserRoleRepository",
]
