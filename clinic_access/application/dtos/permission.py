"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model. code is the resource:action pair used by caches and seeds."""

    id: str
    name: str
    resource: str
    action: str
    description: str | None

    @property
    def code(self) -> str:
        return f"{self.resource}:{self.action}"
