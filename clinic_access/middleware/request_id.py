"""Request ID middleware.

Forwards a client-supplied request id or mints a new one, exposes it to
handlers as request.state.request_id (copied into every audit event of the
request) and echoes it on the response. Raw ASGI, no BaseHTTPMiddleware.
"""

import re
from typing import Callable

from clinic_access.shared.utils.generators import generate_cuid

# Audit rows store the id verbatim; only accept log-safe values.
REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _header_value(scope: dict, name: str) -> str | None:
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("latin-1")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return the client's id when it is short and log-safe; otherwise a fresh cuid."""
    candidate = (raw or "").strip()
    if 0 < len(candidate) <= REQUEST_ID_MAX_LENGTH and _REQUEST_ID_PATTERN.match(candidate):
        return candidate
    return generate_cuid()


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap an ASGI app so every HTTP request carries a request id."""
    encoded_name = header_name.encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header_value(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_header(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (encoded_name, request_id.encode()),
                ]
            await send(message)

        await app(scope, receive, send_with_header)

    return asgi_app
