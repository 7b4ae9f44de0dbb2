from __future__ import annotations

import pytest

from hajj_guide.auth.session import Session
from hajj_guide.core.enums import Role
from hajj_guide.core.exceptions import AuthorizationError, ForeignKeyMissing, InvalidInput, UniquenessViolation
from hajj_guide.medical.service import MedicalProfileService


@pytest.fixture
def service(memory):
    memory.pilgrims.create(
        name="Ahmed", pilgrim_id=1001, phone="0501234567", nationality="Saudi", special_need="", allergies="", age=30
    )
    return MedicalProfileService(memory.medical)


def test_create_records_session_admin(service, memory, admin_session):
    profile = service.create(
        session=admin_session,
        profile_id=9,
        blood_type="o+",
        medications="Metformin",
        medical_history=None,
        pilgrim_id=1001,
    )

    assert profile.admin_id == 42
    assert profile.blood_type == "O+"
    assert profile.medical_history == ""
    assert memory.medical.get_by_id(9) == profile


def test_create_rejects_unknown_blood_type(service, admin_session):
    with pytest.raises(InvalidInput):
        service.create(
            session=admin_session, profile_id=9, blood_type="Z", medications="", medical_history="", pilgrim_id=1001
        )


def test_create_requires_admin(service, pilgrim_session):
    with pytest.raises(AuthorizationError):
        service.create(
            session=pilgrim_session, profile_id=9, blood_type="A+", medications="", medical_history="", pilgrim_id=1001
        )


def test_one_profile_per_pilgrim(service, admin_session):
    service.create(
        session=admin_session, profile_id=9, blood_type="A+", medications="", medical_history="", pilgrim_id=1001
    )

    with pytest.raises(UniquenessViolation):
        service.create(
            session=admin_session, profile_id=10, blood_type="B+", medications="", medical_history="", pilgrim_id=1001
        )


def test_profile_for_unknown_pilgrim(service, admin_session):
    with pytest.raises(ForeignKeyMissing):
        service.create(
            session=admin_session, profile_id=9, blood_type="A+", medications="", medical_history="", pilgrim_id=5555
        )


def test_pilgrim_reads_own_profile_only(service, admin_session, pilgrim_session):
    service.create(
        session=admin_session, profile_id=9, blood_type="A+", medications="", medical_history="", pilgrim_id=1001
    )

    assert service.get_for_pilgrim(session=pilgrim_session, pilgrim_id=1001).profile_id == 9
    with pytest.raises(AuthorizationError):
        service.get_for_pilgrim(session=pilgrim_session, pilgrim_id=1002)


def test_update_switches_author(service, memory, admin_session):
    service.create(
        session=admin_session, profile_id=9, blood_type="A+", medications="", medical_history="", pilgrim_id=1001
    )
    memory.admins.seed(7, "Omar", "0666", "o@x", "pw")

    service.update(
        session=Session(role=Role.ADMIN, id=7),
        profile_id=9,
        blood_type="AB-",
        medications="Insulin",
        medical_history="",
    )

    stored = memory.medical.get_by_id(9)
    assert stored.admin_id == 7
    assert stored.blood_type == "AB-"
    assert stored.medications == "Insulin"
