"""Actor authentication, request context and permission dependencies."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_access.application.services.authorization_service import AuthorizationService
from clinic_access.domain.exceptions import AuthenticationException
from clinic_access.infrastructure.persistence.database import get_db
from clinic_access.infrastructure.security.jwt import verify_token
from clinic_access.infrastructure.services.permission_resolver import PermissionResolver
from clinic_access.shared.context import RequestContext
from clinic_access.shared.request_audit import request_context_from_request

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_actor_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Return the verified actor id (token sub); 401 if missing or invalid."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from None
    return str(payload["sub"])


async def get_request_context(
    request: Request,
    actor_id: Annotated[str, Depends(get_current_actor_id)],
) -> RequestContext:
    """Explicit audit context for this request (actor, ip, user agent, request id)."""
    return request_context_from_request(request, actor_id=actor_id)


async def get_authorization_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizationService:
    """Build AuthorizationService with permission resolver and optional cache.

    Cache is set in app lifespan (app.state.cache) when Redis is enabled;
    otherwise cache is None and permission listings hit the DB only.
    """
    return AuthorizationService(
        permission_resolver=PermissionResolver(db),
        cache=getattr(request.app.state, "cache", None),
    )


def require_permission(resource: str, action: str) -> Callable[..., Awaitable[str]]:
    """Dependency factory: require bearer auth and resource:action; returns the actor id."""

    async def _require(
        actor_id: Annotated[str, Depends(get_current_actor_id)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> str:
        await auth_svc.require_permission(actor_id, resource, action)
        return actor_id

    return _require
