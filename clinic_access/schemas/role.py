"""Role and user-role API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from clinic_access.domain.enums import RoleChangeOutcome


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None


class RoleChangeRequest(BaseModel):
    """Request body for replacing one of a user's roles with another."""

    current_role: str = Field(..., min_length=1, max_length=100)
    new_role: str = Field(..., min_length=1, max_length=100)


class RoleChangeResponse(BaseModel):
    """Outcome of a role change. success is False for every outcome but changed."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    previous_role: str
    new_role: str
    outcome: RoleChangeOutcome
    success: bool
    message: str


class UserPermissionsResponse(BaseModel):
    """Permission codes (resource:action) a user holds through their roles."""

    user_id: str
    permissions: list[str]
