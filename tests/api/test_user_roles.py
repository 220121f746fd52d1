"""User roles API tests: list roles and the audited role change."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from clinic_access.api.v1.dependencies import (
    get_audit_recorder,
    get_authorization_service,
    get_role_assignment_service,
)
from clinic_access.application.dtos.audit_log import AuditWriteResult
from clinic_access.application.dtos.role import RoleChangeResult, RoleResult
from clinic_access.application.services.authorization_service import AuthorizationService
from clinic_access.domain.enums import RoleChangeOutcome
from clinic_access.shared.context import RequestContext


def _allow_all() -> AuthorizationService:
    resolver = AsyncMock()
    resolver.get_role_ids.return_value = ["role-admin"]
    resolver.any_role_grants.return_value = True
    return AuthorizationService(resolver)


@pytest.fixture
def role_svc(app: FastAPI) -> AsyncMock:
    svc = AsyncMock()
    svc.get_user_roles.return_value = [
        RoleResult(id="role-doctor", name="Doctor", description="Clinical care")
    ]
    app.dependency_overrides[get_role_assignment_service] = lambda: svc
    app.dependency_overrides[get_authorization_service] = _allow_all
    return svc


@pytest.fixture
def recorder(app: FastAPI) -> AsyncMock:
    rec = AsyncMock()
    rec.update.return_value = AuditWriteResult.failed("not persisted in tests")
    app.dependency_overrides[get_audit_recorder] = lambda: rec
    return rec


def _change(outcome: RoleChangeOutcome, message: str) -> RoleChangeResult:
    return RoleChangeResult(
        user_id="u-2", previous_role="Doctor", new_role="Nurse", outcome=outcome, message=message
    )


async def test_list_user_roles(
    client: AsyncClient, auth_headers: dict[str, str], role_svc: AsyncMock
) -> None:
    response = await client.get("/api/v1/users/u-2/roles", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == [
        {"id": "role-doctor", "name": "Doctor", "description": "Clinical care"}
    ]
    role_svc.get_user_roles.assert_awaited_once_with("u-2")


async def test_change_role_success_is_audited(
    client: AsyncClient,
    auth_headers: dict[str, str],
    role_svc: AsyncMock,
    recorder: AsyncMock,
) -> None:
    role_svc.change_role.return_value = _change(
        RoleChangeOutcome.CHANGED, "User role updated successfully"
    )
    response = await client.put(
        "/api/v1/users/u-2/roles",
        json={"current_role": "Doctor", "new_role": "Nurse"},
        headers={**auth_headers, "User-Agent": "ClinicAdmin/1.0", "X-Forwarded-For": "203.0.113.4"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["outcome"] == "changed"
    role_svc.change_role.assert_awaited_once_with(
        "u-2", "Doctor", "Nurse", assigned_by="user-1"
    )
    ctx, resource_type, resource_id, details = recorder.update.await_args.args
    assert isinstance(ctx, RequestContext)
    assert ctx.actor_id == "user-1"
    assert ctx.ip_address == "203.0.113.4"
    assert ctx.user_agent == "ClinicAdmin/1.0"
    assert (resource_type, resource_id) == ("user_role", "u-2")
    assert details == {"previous_role": "Doctor", "new_role": "Nurse", "outcome": "changed"}


async def test_change_role_failure_returns_409(
    client: AsyncClient,
    auth_headers: dict[str, str],
    role_svc: AsyncMock,
    recorder: AsyncMock,
) -> None:
    role_svc.change_role.return_value = _change(
        RoleChangeOutcome.ASSIGN_FAILED_RESTORED, "Failed to assign new role"
    )
    response = await client.put(
        "/api/v1/users/u-2/roles",
        json={"current_role": "Doctor", "new_role": "Nurse"},
        headers=auth_headers,
    )
    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["outcome"] == "assign_failed_restored"
    assert body["message"] == "Failed to assign new role"
    recorder.update.assert_awaited_once()


async def test_change_role_validates_body(
    client: AsyncClient, auth_headers: dict[str, str], role_svc: AsyncMock, recorder: AsyncMock
) -> None:
    response = await client.put(
        "/api/v1/users/u-2/roles", json={"current_role": "Doctor"}, headers=auth_headers
    )
    assert response.status_code == 422
    role_svc.change_role.assert_not_awaited()


async def test_change_role_requires_permission(
    app: FastAPI,
    client: AsyncClient,
    auth_headers: dict[str, str],
    role_svc: AsyncMock,
    recorder: AsyncMock,
) -> None:
    resolver = AsyncMock()
    resolver.get_role_ids.return_value = []
    app.dependency_overrides[get_authorization_service] = lambda: AuthorizationService(resolver)
    response = await client.put(
        "/api/v1/users/u-2/roles",
        json={"current_role": "Doctor", "new_role": "Nurse"},
        headers=auth_headers,
    )
    assert response.status_code == 403
    role_svc.change_role.assert_not_awaited()
    recorder.update.assert_not_awaited()


async def test_list_user_permissions_served_from_cache_after_first_call(
    app: FastAPI, client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    resolver = AsyncMock()
    resolver.get_role_ids.return_value = ["role-it-support"]
    resolver.any_role_grants.return_value = True
    resolver.get_user_permissions.return_value = {"vitals:view", "patient:view"}
    cached: dict[str, set[str]] = {}
    cache = MagicMock()
    cache.is_available.return_value = True
    cache.get_codes = AsyncMock(side_effect=lambda user_id: cached.get(user_id))
    cache.set_codes = AsyncMock(side_effect=lambda user_id, codes: cached.update({user_id: codes}))
    app.dependency_overrides[get_authorization_service] = lambda: AuthorizationService(
        resolver, cache=cache
    )

    for _ in range(2):
        response = await client.get("/api/v1/users/u-2/permissions", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {
            "user_id": "u-2",
            "permissions": ["patient:view", "vitals:view"],
        }
    resolver.get_user_permissions.assert_awaited_once_with("u-2")
    resolver.any_role_grants.assert_awaited_with(["role-it-support"], "user_role", "view")


async def test_list_user_permissions_requires_permission(
    app: FastAPI, client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    resolver = AsyncMock()
    resolver.get_role_ids.return_value = ["role-patient"]
    resolver.any_role_grants.return_value = False
    app.dependency_overrides[get_authorization_service] = lambda: AuthorizationService(resolver)
    response = await client.get("/api/v1/users/u-2/permissions", headers=auth_headers)
    assert response.status_code == 403
    resolver.get_user_permissions.assert_not_awaited()
