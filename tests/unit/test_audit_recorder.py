"""Unit tests for AuditRecorder: event shape, sanitization and never-raise behaviour."""

from datetime import date, datetime, timezone
from enum import Enum
from unittest.mock import AsyncMock

from clinic_access.application.dtos.audit_log import AuditEventCreate, AuditEventResult
from clinic_access.application.services.audit_recorder import AuditRecorder, sanitize_details
from clinic_access.shared.context import RequestContext

CTX = RequestContext(
    actor_id="user-1",
    ip_address="10.0.0.7",
    user_agent="Mozilla/5.0",
    request_id="req-1",
)


def _repo() -> AsyncMock:
    repo = AsyncMock()

    async def _create(entry: AuditEventCreate) -> AuditEventResult:
        return AuditEventResult(
            id="evt-1",
            user_id=entry.user_id,
            action=entry.action,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            details=entry.details,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            request_id=entry.request_id,
            created_at=datetime(2026, 10, 19, tzinfo=timezone.utc),
        )

    repo.create.side_effect = _create
    return repo


def _written(repo: AsyncMock) -> AuditEventCreate:
    return repo.create.await_args.args[0]


async def test_create_records_actor_and_transport() -> None:
    repo = _repo()
    result = await AuditRecorder(repo).create(CTX, "patient", "p-1", {"first_name": "Ada"})
    assert result.success is True
    assert result.event is not None and result.event.id == "evt-1"
    entry = _written(repo)
    assert entry.user_id == "user-1"
    assert entry.action == "create"
    assert entry.resource_type == "patient"
    assert entry.resource_id == "p-1"
    assert entry.details == {"first_name": "Ada"}
    assert entry.ip_address == "10.0.0.7"
    assert entry.user_agent == "Mozilla/5.0"
    assert entry.request_id == "req-1"


async def test_missing_transport_is_stored_as_unknown() -> None:
    repo = _repo()
    await AuditRecorder(repo).view(RequestContext(actor_id="user-1"), "patient", "p-1")
    entry = _written(repo)
    assert entry.ip_address == "unknown"
    assert entry.user_agent == "unknown"


async def test_unknown_sentinel_is_configurable() -> None:
    repo = _repo()
    await AuditRecorder(repo, unknown_value="n/a").view(RequestContext.system(), "report")
    assert _written(repo).ip_address == "n/a"


async def test_system_context_records_null_actor() -> None:
    repo = _repo()
    result = await AuditRecorder(repo).custom(RequestContext.system(), "purge", "report")
    assert result.success is True
    entry = _written(repo)
    assert entry.user_id is None
    assert entry.action == "purge"
    assert entry.resource_id is None


async def test_store_failure_is_returned_not_raised() -> None:
    repo = AsyncMock()
    repo.create.side_effect = ConnectionError("audit store down")
    result = await AuditRecorder(repo).delete(CTX, "appointment", "a-1")
    assert result.success is False
    assert result.event is None
    assert result.error == "audit store down"


async def test_failure_without_message_reports_exception_name() -> None:
    repo = AsyncMock()
    repo.create.side_effect = TimeoutError()
    result = await AuditRecorder(repo).update(CTX, "patient", "p-1")
    assert result.success is False
    assert result.error == "TimeoutError"


async def test_verbs_map_to_actions() -> None:
    repo = _repo()
    recorder = AuditRecorder(repo)
    await recorder.create(CTX, "patient", "p-1")
    await recorder.update(CTX, "patient", "p-1")
    await recorder.delete(CTX, "patient", "p-1")
    await recorder.view(CTX, "patient", "p-1")
    actions = [call.args[0].action for call in repo.create.await_args_list]
    assert actions == ["create", "update", "delete", "view"]


async def test_login_and_logout_target_the_actor() -> None:
    repo = _repo()
    recorder = AuditRecorder(repo)
    await recorder.login(CTX, {"method": "password"})
    await recorder.logout(CTX)
    login, logout = (call.args[0] for call in repo.create.await_args_list)
    assert (login.action, login.resource_type, login.resource_id) == ("login", "auth", "user-1")
    assert login.details == {"method": "password"}
    assert (logout.action, logout.resource_type, logout.resource_id) == ("logout", "auth", "user-1")


async def test_empty_details_are_stored_as_null() -> None:
    repo = _repo()
    await AuditRecorder(repo).create(CTX, "clinic", "c-1", {})
    assert _written(repo).details is None


async def test_sensitive_details_are_redacted_before_write() -> None:
    repo = _repo()
    await AuditRecorder(repo).update(
        CTX, "staff", "s-1", {"email": "a@b.c", "password": "hunter2", "nested": {"Token": "x"}}
    )
    assert _written(repo).details == {
        "email": "a@b.c",
        "password": "[REDACTED]",
        "nested": {"Token": "[REDACTED]"},
    }


async def test_record_update_attaches_changes() -> None:
    repo = _repo()
    result = await AuditRecorder(repo).record_update(
        CTX,
        "patient",
        "p-1",
        before={"last_name": "Lovelace", "phone": "555"},
        after={"last_name": "King", "phone": "555"},
        extra={"reason": "marriage"},
    )
    assert result.success is True
    entry = _written(repo)
    assert entry.action == "update"
    assert entry.details == {
        "reason": "marriage",
        "changes": {"last_name": {"before": "Lovelace", "after": "King"}},
    }


async def test_record_update_without_changes_has_no_details() -> None:
    repo = _repo()
    await AuditRecorder(repo).record_update(CTX, "patient", "p-1", {"a": 1}, {"a": 1})
    assert _written(repo).details is None


class _Status(str, Enum):
    ACTIVE = "active"


def test_sanitize_details_coerces_values() -> None:
    ts = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)
    data = {
        "at": ts,
        "on": date(2026, 10, 19),
        "status": _Status.ACTIVE,
        "ids": ("a", "b"),
        "amount": 12.5,
        "flag": None,
        "obj": object,
    }
    clean = sanitize_details(data)
    assert clean["at"] == ts.isoformat()
    assert clean["on"] == "2026-10-19"
    assert clean["status"] == "active"
    assert clean["ids"] == ["a", "b"]
    assert clean["amount"] == 12.5
    assert clean["flag"] is None
    assert clean["obj"] == str(object)


def test_sanitize_details_redacts_inside_lists() -> None:
    clean = sanitize_details({"accounts": [{"api_key": "k", "name": "n"}]})
    assert clean == {"accounts": [{"api_key": "[REDACTED]", "name": "n"}]}
