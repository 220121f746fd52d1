"""DTOs for the audit trail (write input, read-models, query filters, results)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditEventCreate:
    """Input for appending one audit event. Append-only; no update."""

    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    details: dict[str, Any] | None
    ip_address: str
    user_agent: str
    request_id: str | None = None


@dataclass(frozen=True)
class AuditEventResult:
    """Single persisted audit event (read-model)."""

    id: str
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    details: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    request_id: str | None
    created_at: datetime


@dataclass(frozen=True)
class ActorProfile:
    """Display identity of an actor. All fields None when no profile exists."""

    id: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def empty(cls) -> "ActorProfile":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.id is None

    @property
    def display_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        return self.email


@dataclass(frozen=True)
class AuditEventWithActor:
    """Audit event enriched with the actor's profile (empty when unknown)."""

    event: AuditEventResult
    actor: ActorProfile


@dataclass(frozen=True)
class AuditLogFilters:
    """Conjunctive filters for the audit query. None means no constraint.

    limit None uses the configured default; start_date/end_date are inclusive.
    """

    user_id: str | None = None
    action: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    limit: int | None = None
    offset: int = 0
    include_total: bool = True


@dataclass(frozen=True)
class AuditLogPage:
    """One page of enriched audit events.

    total is the filtered count before pagination (None when not requested).
    error is set when the store failed; items is then empty.
    """

    items: list[AuditEventWithActor] = field(default_factory=list)
    total: int | None = None
    limit: int = 0
    offset: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AuditWriteResult:
    """Result of an audit write. Never raised; failures carry error text."""

    success: bool
    event: AuditEventResult | None = None
    error: str | None = None

    @classmethod
    def ok(cls, event: AuditEventResult) -> "AuditWriteResult":
        return cls(success=True, event=event)

    @classmethod
    def failed(cls, error: str) -> "AuditWriteResult":
        return cls(success=False, error=error)
