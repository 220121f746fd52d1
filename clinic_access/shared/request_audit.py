"""Derive a RequestContext from a Starlette Request.

Single source of truth for client identity: request_id from request state
(set by RequestIDMiddleware), IP from X-Forwarded-For (first hop), then
X-Real-IP, then the socket peer; user agent from the User-Agent header.
"""

from __future__ import annotations

from starlette.requests import Request

from clinic_access.shared.context import RequestContext


def get_client_ip(request: Request) -> str | None:
    """Return the originating client IP, or None when the transport hides it."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    real_ip = request.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return request.client.host if request.client else None


def request_context_from_request(
    request: Request, actor_id: str | None = None
) -> RequestContext:
    """Build the explicit audit context for this request.

    Args:
        request: Incoming request.
        actor_id: Verified actor id (token subject) or None for anonymous/system.
    """
    return RequestContext(
        actor_id=actor_id,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
        request_id=getattr(request.state, "request_id", None),
    )
