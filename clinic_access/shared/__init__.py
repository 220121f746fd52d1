"""Shared utilities: request context, enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from clinic_access.shared.context import RequestContext
from clinic_access.shared.enums import ActorType, AuditAction
from clinic_access.shared.utils import ensure_utc, generate_cuid, short_id, utc_now

__all__ = [
    "RequestContext",
    "ActorType",
    "AuditAction",
    "generate_cuid",
    "short_id",
    "utc_now",
    "ensure_utc",
]
