from __future__ import annotations

import pytest

from hajj_guide.core.exceptions import AuthorizationError, DuplicateKey, IntegrityViolation, InvalidInput, NotFound
from hajj_guide.pilgrims.model import Pilgrim
from hajj_guide.pilgrims.service import PilgrimService


def _register(service: PilgrimService, pilgrim_id=1001, **overrides):
    fields = dict(
        name="Ahmed",
        pilgrim_id=pilgrim_id,
        phone="0501234567",
        nationality="Saudi",
        special_need="",
        allergies="",
        age=30,
    )
    fields.update(overrides)
    return service.register(**fields)


def _service(memory) -> PilgrimService:
    return PilgrimService(
        memory.pilgrims,
        medical=memory.medical,
        accommodations=memory.accommodations,
        transport=memory.transport,
        permits=memory.permits,
    )


def test_register_then_read_back(memory, admin_session):
    service = _service(memory)

    created = _register(service, name="  Ahmed  ", allergies=None)

    assert created == Pilgrim(1001, "Ahmed", "0501234567", "Saudi", "", "", 30)
    assert service.get(session=admin_session, pilgrim_id=1001) == created


def test_register_twice_is_duplicate(memory):
    service = _service(memory)
    _register(service)

    with pytest.raises(DuplicateKey):
        _register(service, name="Someone else")


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"phone": "   "},
        {"nationality": None},
        {"age": -1},
        {"age": 131},
        {"age": "thirty"},
        {"pilgrim_id": 0},
        {"pilgrim_id": "abc"},
    ],
)
def test_register_rejects_invalid_input(memory, overrides):
    with pytest.raises(InvalidInput):
        _register(_service(memory), **overrides)
    assert memory.pilgrims.rows == {}


def test_pilgrim_can_only_read_self(memory, pilgrim_session):
    service = _service(memory)
    _register(service, pilgrim_id=1001)
    _register(service, pilgrim_id=1002, name="Fatima")

    assert service.get(session=pilgrim_session, pilgrim_id=1001).name == "Ahmed"
    with pytest.raises(AuthorizationError):
        service.get(session=pilgrim_session, pilgrim_id=1002)


def test_get_missing_returns_none(memory, admin_session):
    assert _service(memory).get(session=admin_session, pilgrim_id=9999) is None


def test_list_all_requires_admin(memory, admin_session, pilgrim_session):
    service = _service(memory)
    _register(service)

    assert [p.pilgrim_id for p in service.list_all(session=admin_session)] == [1001]
    with pytest.raises(AuthorizationError):
        service.list_all(session=pilgrim_session)
    with pytest.raises(AuthorizationError):
        service.list_all(session=None)


def test_update_by_admin(memory, admin_session):
    service = _service(memory)
    _register(service)

    service.update(
        session=admin_session,
        pilgrim_id=1001,
        name="Ahmed Ali",
        phone="0501234567",
        nationality="Saudi",
        special_need="Wheelchair",
        allergies="Penicillin",
        age=31,
    )

    stored = memory.pilgrims.get_by_id(1001)
    assert stored.name == "Ahmed Ali"
    assert stored.special_need == "Wheelchair"
    assert stored.age == 31


def test_update_missing_pilgrim(memory, admin_session):
    with pytest.raises(NotFound):
        _service(memory).update(
            session=admin_session,
            pilgrim_id=9999,
            name="X",
            phone="1",
            nationality="Y",
            age=20,
        )


def test_update_refused_for_pilgrim_session(memory, pilgrim_session):
    service = _service(memory)
    _register(service)

    with pytest.raises(AuthorizationError):
        service.update(
            session=pilgrim_session,
            pilgrim_id=1001,
            name="Changed",
            phone="1",
            nationality="Y",
            age=20,
        )
    assert memory.pilgrims.get_by_id(1001).name == "Ahmed"


def test_delete_with_dependents_is_refused(memory, admin_session):
    service = _service(memory)
    _register(service)
    memory.pilgrims.dependents[1001] = 1

    with pytest.raises(IntegrityViolation):
        service.delete(session=admin_session, pilgrim_id=1001)
    assert memory.pilgrims.exists(1001)


def test_delete_by_admin(memory, admin_session):
    service = _service(memory)
    _register(service)

    service.delete(session=admin_session, pilgrim_id=1001)

    assert not memory.pilgrims.exists(1001)


def test_dashboard_collects_everything_for_the_pilgrim(memory, pilgrim_session):
    service = _service(memory)
    _register(service)
    memory.medical.create(
        profile_id=9, blood_type="O+", medications="", medical_history="", pilgrim_id=1001, admin_id=42
    )
    memory.accommodations.create(
        accommodation_id=7, hotel_name="Mina Towers", room_type="Double", capacity=2, address="Mina", admin_id=42
    )
    memory.accommodations.assign_pilgrim(1001, 7)
    memory.permits.create(permit_id=5, name="Rawdah", location="Madinah", service_type="Visit")
    memory.permits.assign_permit(1001, 5)

    dashboard = service.dashboard(session=pilgrim_session, pilgrim_id=1001)

    assert dashboard.pilgrim.name == "Ahmed"
    assert dashboard.medical_profile.blood_type == "O+"
    assert [a.accommodation_id for a in dashboard.accommodations] == [7]
    assert dashboard.transport == ()
    assert [p.permit_id for p in dashboard.permits] == [5]


def test_dashboard_without_optional_gateways(memory, admin_session):
    service = PilgrimService(memory.pilgrims)
    _register(service)

    dashboard = service.dashboard(session=admin_session, pilgrim_id=1001)

    assert dashboard.medical_profile is None
    assert dashboard.accommodations == ()


def test_dashboard_for_missing_pilgrim(memory, admin_session):
    with pytest.raises(NotFound):
        _service(memory).dashboard(session=admin_session, pilgrim_id=4040)


def test_register_without_age_defaults_to_zero(memory, admin_session):
    service = _service(memory)
    fields = dict(name="Ahmed", pilgrim_id=1001, phone="0501234567", nationality="Saudi")

    created = service.register(**fields)

    assert created.age == 0
    assert service.get(session=admin_session, pilgrim_id=1001).age == 0
