"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from clinic_access.api.v1.dependencies.
"""

from fastapi import APIRouter

from clinic_access.api.v1.endpoints import audit_logs, health, user_roles

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])
api_router.include_router(user_roles.router, prefix="/users", tags=["user-roles"])
