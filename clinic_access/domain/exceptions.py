"""Domain exceptions for the clinic access core.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Services
convert store faults into safe defaults at their boundary; the HTTP layer
maps the remaining exceptions to responses in exception handlers.
"""

from typing import Any


class ClinicAccessException(Exception):
    """Base exception for all clinic access errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ClinicAccessException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(ClinicAccessException):
    """Raised when the bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(ClinicAccessException):
    """Raised when the actor lacks the permission required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'patient', 'audit_log').
            action: Optional action that was attempted (e.g. 'view', 'update').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(ClinicAccessException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'audit_log', 'role').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class RoleNotFoundException(ClinicAccessException):
    """Raised when a role name does not resolve to a stored role."""

    def __init__(self, role_name: str) -> None:
        super().__init__(
            f"Role not found: {role_name}",
            "ROLE_NOT_FOUND",
            {"role_name": role_name},
        )


class DuplicateAssignmentException(ClinicAccessException):
    """Raised when assigning a role/permission that is already assigned (unique constraint)."""

    def __init__(
        self,
        message: str,
        assignment_type: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and assignment context.

        Args:
            message: Human-readable description (e.g. 'Role already assigned to user').
            assignment_type: 'role_permission' or 'user_role'.
            details_extra: Optional extra keys (e.g. role_id, user_id).
        """
        details = dict(details_extra or {})
        details["assignment_type"] = assignment_type
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class AuditLogImmutableException(ClinicAccessException):
    """Raised on any attempt to update or delete a persisted audit event."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Audit log entries are append-only; {operation} is not allowed",
            "AUDIT_LOG_IMMUTABLE",
            {"operation": operation},
        )


class SqlNotConfiguredException(ClinicAccessException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
