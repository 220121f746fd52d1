"""Explicit request context for audit and permission calls.

The actor identity and transport metadata of the current request are
captured once (see clinic_access.shared.request_audit) and passed as a
parameter to every audit call, instead of being read from ambient state.

Usage:
    ctx = RequestContext(actor_id="user123", ip_address="10.0.0.1")
    await recorder.create(ctx, "patient", patient_id)
    await recorder.custom(RequestContext.system(), "purge", "report")
"""

from dataclasses import dataclass, replace

from clinic_access.shared.enums import ActorType


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of who is calling and from where.

    actor_id is None for system-initiated work (jobs, seeding); that is
    recorded as such, not rejected.
    """

    actor_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None

    @classmethod
    def system(cls, request_id: str | None = None) -> "RequestContext":
        """Context for background/system actions (no actor, no transport)."""
        return cls(request_id=request_id)

    @property
    def actor_type(self) -> ActorType:
        return ActorType.USER if self.actor_id else ActorType.SYSTEM

    def with_actor(self, actor_id: str | None) -> "RequestContext":
        """Return a copy with a different actor (e.g. after token verification)."""
        return replace(self, actor_id=actor_id)

    def transport_or(self, unknown: str) -> tuple[str, str]:
        """Return (ip_address, user_agent), substituting ``unknown`` for missing values."""
        return (self.ip_address or unknown, self.user_agent or unknown)
