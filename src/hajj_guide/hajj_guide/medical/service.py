from __future__ import annotations

from typing import Optional

from ..auth.session import Session, require_admin, require_self_or_admin
from ..common.validators import optional_text, require_choice, require_positive_id
from ..core.enums import BloodType
from .gateway import MedicalProfileGateway
from .model import MedicalProfile


class MedicalProfileService:
    """Use case: admins keep the medical file; pilgrims read their own."""

    def __init__(self, profiles: MedicalProfileGateway):
        self._profiles = profiles

    def create(
        self,
        *,
        session: Session,
        profile_id,
        blood_type: str,
        medications: Optional[str],
        medical_history: Optional[str],
        pilgrim_id,
    ) -> MedicalProfile:
        admin_id = require_admin(session)
        profile = MedicalProfile(
            profile_id=require_positive_id(profile_id, "Profile ID"),
            blood_type=require_choice(blood_type, BloodType, "Blood type").value,
            medications=optional_text(medications),
            medical_history=optional_text(medical_history),
            pilgrim_id=require_positive_id(pilgrim_id, "Pilgrim ID"),
            admin_id=admin_id,
        )
        self._profiles.create(
            profile_id=profile.profile_id,
            blood_type=profile.blood_type,
            medications=profile.medications,
            medical_history=profile.medical_history,
            pilgrim_id=profile.pilgrim_id,
            admin_id=profile.admin_id,
        )
        return profile

    def get_for_pilgrim(self, *, session: Session, pilgrim_id) -> Optional[MedicalProfile]:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        require_self_or_admin(session, pilgrim_id)
        return self._profiles.get_by_pilgrim_id(pilgrim_id)

    def update(
        self,
        *,
        session: Session,
        profile_id,
        blood_type: str,
        medications: Optional[str],
        medical_history: Optional[str],
    ) -> None:
        admin_id = require_admin(session)
        self._profiles.update(
            profile_id=require_positive_id(profile_id, "Profile ID"),
            blood_type=require_choice(blood_type, BloodType, "Blood type").value,
            medications=optional_text(medications),
            medical_history=optional_text(medical_history),
            admin_id=admin_id,
        )
