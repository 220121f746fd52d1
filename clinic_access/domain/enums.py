"""Domain enumerations for the clinic access core.

Enums represent fixed sets of domain outcomes (authorization decisions,
role change saga results).
"""

from enum import Enum


class PermissionDecision(str, Enum):
    """Outcome of a permission evaluation.

    Only ALLOWED grants access. ERROR is kept distinct from DENIED so
    callers that alert on infrastructure faults can tell them apart.
    """

    ALLOWED = "allowed"
    DENIED = "denied"
    NO_ROLES = "no_roles"
    ERROR = "error"

    @property
    def is_allowed(self) -> bool:
        return self is PermissionDecision.ALLOWED


class RoleChangeOutcome(str, Enum):
    """Net result of the remove-then-assign role change workflow."""

    CHANGED = "changed"
    REMOVE_FAILED = "remove_failed"
    ASSIGN_FAILED_RESTORED = "assign_failed_restored"
    ASSIGN_FAILED_RESTORE_FAILED = "assign_failed_restore_failed"

    @property
    def succeeded(self) -> bool:
        return self is RoleChangeOutcome.CHANGED
