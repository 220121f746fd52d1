"""Unit tests for ResourceNameResolver labels and fallbacks."""

from unittest.mock import AsyncMock

from clinic_access.application.dtos.audit_log import ActorProfile
from clinic_access.application.services.resource_name_resolver import ResourceNameResolver


def _resolver() -> tuple[ResourceNameResolver, AsyncMock, AsyncMock]:
    lookup_repo = AsyncMock()
    lookup_repo.get_patient_name.return_value = ("Ada", "Lovelace")
    lookup_repo.get_doctor_user_id.return_value = "user-doc"
    lookup_repo.get_clinic_name.return_value = "Mulago Clinic"
    lookup_repo.get_appointment_id.return_value = "appt1234567890"
    profile_repo = AsyncMock()
    profile_repo.get_by_id.return_value = ActorProfile(
        id="user-doc", email=None, first_name="Grace", last_name="Hopper"
    )
    return ResourceNameResolver(lookup_repo, profile_repo), lookup_repo, profile_repo


async def test_patient_label() -> None:
    resolver, _, _ = _resolver()
    assert await resolver.get_resource_name("patient", "p-1") == "Ada Lovelace"


async def test_doctor_label_uses_linked_profile() -> None:
    resolver, _, profile_repo = _resolver()
    assert await resolver.get_resource_name("doctor", "d-1") == "Dr. Grace Hopper"
    profile_repo.get_by_id.assert_awaited_once_with("user-doc")


async def test_appointment_label_uses_short_id() -> None:
    resolver, _, _ = _resolver()
    assert await resolver.get_resource_name("appointment", "x") == "Appointment #appt1234"


async def test_clinic_label() -> None:
    resolver, _, _ = _resolver()
    assert await resolver.get_resource_name("clinic", "c-1") == "Mulago Clinic"


async def test_missing_rows_use_unknown_labels() -> None:
    resolver, lookup_repo, profile_repo = _resolver()
    lookup_repo.get_patient_name.return_value = None
    lookup_repo.get_doctor_user_id.return_value = None
    lookup_repo.get_clinic_name.return_value = None
    lookup_repo.get_appointment_id.return_value = None
    assert await resolver.get_resource_name("patient", "p") == "Unknown Patient"
    assert await resolver.get_resource_name("doctor", "d") == "Unknown Doctor"
    assert await resolver.get_resource_name("clinic", "c") == "Unknown Clinic"
    assert await resolver.get_resource_name("appointment", "a") == "Unknown Appointment"
    profile_repo.get_by_id.assert_not_awaited()


async def test_unregistered_type_falls_back_to_type_and_short_id() -> None:
    resolver, _, _ = _resolver()
    label = await resolver.get_resource_name("invoice", "inv_9f8e7d6c5b4a")
    assert label == "invoice #inv_9f8e"


async def test_missing_resource_id_falls_back_without_lookup() -> None:
    resolver, lookup_repo, _ = _resolver()
    assert await resolver.get_resource_name("report", None) == "report #"
    assert await resolver.get_resource_name("patient", None) == "patient #"
    lookup_repo.get_patient_name.assert_not_awaited()


async def test_lookup_fault_falls_back() -> None:
    resolver, lookup_repo, _ = _resolver()
    lookup_repo.get_patient_name.side_effect = ConnectionError("db down")
    assert await resolver.get_resource_name("patient", "pat12345678") == "patient #pat12345"


async def test_register_custom_lookup() -> None:
    resolver, _, _ = _resolver()

    async def _invoice_label(resource_id: str) -> str:
        return f"Invoice {resource_id.upper()}"

    resolver.register("invoice", _invoice_label)
    assert await resolver.get_resource_name("invoice", "inv-1") == "Invoice INV-1"


async def test_id_length_is_configurable() -> None:
    resolver = ResourceNameResolver(AsyncMock(), AsyncMock(), id_length=4)
    assert await resolver.get_resource_name("invoice", "abcdefgh") == "invoice #abcd"
