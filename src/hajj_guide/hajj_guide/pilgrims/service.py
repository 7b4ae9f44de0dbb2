from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..accommodations.gateway import AccommodationGateway
from ..accommodations.model import Accommodation
from ..auth.session import Session, require_admin, require_self_or_admin
from ..common.validators import optional_text, require_in_range, require_non_empty, require_positive_id
from ..core.constants import MAX_PILGRIM_AGE, MIN_PILGRIM_AGE
from ..core.exceptions import NotFound
from ..medical.gateway import MedicalProfileGateway
from ..medical.model import MedicalProfile
from ..permits.gateway import PermitGateway
from ..permits.model import Permit
from ..transport.gateway import TransportScheduleGateway
from ..transport.model import TransportSchedule
from .gateway import PilgrimGateway
from .model import Pilgrim


@dataclass(frozen=True)
class PilgrimDashboard:
    """Everything a logged-in pilgrim can see about themselves."""

    pilgrim: Pilgrim
    medical_profile: Optional[MedicalProfile] = None
    accommodations: Sequence[Accommodation] = field(default_factory=tuple)
    transport: Sequence[TransportSchedule] = field(default_factory=tuple)
    permits: Sequence[Permit] = field(default_factory=tuple)


def _clean(
    *,
    name: str,
    phone: str,
    nationality: str,
    special_need: Optional[str],
    allergies: Optional[str],
    age,
) -> dict:
    return {
        "name": require_non_empty(name, "Name"),
        "phone": require_non_empty(phone, "Phone"),
        "nationality": require_non_empty(nationality, "Nationality"),
        "special_need": optional_text(special_need),
        "allergies": optional_text(allergies),
        "age": require_in_range(age, "Age", minimum=MIN_PILGRIM_AGE, maximum=MAX_PILGRIM_AGE),
    }


class PilgrimService:
    """Use cases around pilgrim records: self-registration, admin edits, dashboard."""

    def __init__(
        self,
        pilgrims: PilgrimGateway,
        medical: Optional[MedicalProfileGateway] = None,
        accommodations: Optional[AccommodationGateway] = None,
        transport: Optional[TransportScheduleGateway] = None,
        permits: Optional[PermitGateway] = None,
    ):
        self._pilgrims = pilgrims
        self._medical = medical
        self._accommodations = accommodations
        self._transport = transport
        self._permits = permits

    def register(
        self,
        *,
        name: str,
        pilgrim_id,
        phone: str,
        nationality: str,
        special_need: Optional[str] = "",
        allergies: Optional[str] = "",
        age=0,
    ) -> Pilgrim:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        fields = _clean(
            name=name,
            phone=phone,
            nationality=nationality,
            special_need=special_need,
            allergies=allergies,
            age=age,
        )
        self._pilgrims.create(pilgrim_id=pilgrim_id, **fields)
        return Pilgrim(pilgrim_id=pilgrim_id, **fields)

    def get(self, *, session: Session, pilgrim_id) -> Optional[Pilgrim]:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        require_self_or_admin(session, pilgrim_id)
        return self._pilgrims.get_by_id(pilgrim_id)

    def list_all(self, *, session: Session) -> Sequence[Pilgrim]:
        require_admin(session)
        return self._pilgrims.get_all()

    def update(
        self,
        *,
        session: Session,
        pilgrim_id,
        name: str,
        phone: str,
        nationality: str,
        special_need: Optional[str] = "",
        allergies: Optional[str] = "",
        age,
    ) -> Pilgrim:
        require_admin(session)
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        fields = _clean(
            name=name,
            phone=phone,
            nationality=nationality,
            special_need=special_need,
            allergies=allergies,
            age=age,
        )
        self._pilgrims.update(pilgrim_id=pilgrim_id, **fields)
        return Pilgrim(pilgrim_id=pilgrim_id, **fields)

    def delete(self, *, session: Session, pilgrim_id) -> None:
        require_admin(session)
        self._pilgrims.delete(require_positive_id(pilgrim_id, "Pilgrim ID"))

    def dashboard(self, *, session: Session, pilgrim_id) -> PilgrimDashboard:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        require_self_or_admin(session, pilgrim_id)

        pilgrim = self._pilgrims.get_by_id(pilgrim_id)
        if pilgrim is None:
            raise NotFound(f"Pilgrim {pilgrim_id} not found")

        return PilgrimDashboard(
            pilgrim=pilgrim,
            medical_profile=self._medical.get_by_pilgrim_id(pilgrim_id) if self._medical else None,
            accommodations=tuple(self._accommodations.list_for_pilgrim(pilgrim_id)) if self._accommodations else (),
            transport=tuple(self._transport.list_for_pilgrim(pilgrim_id)) if self._transport else (),
            permits=tuple(self._permits.list_for_pilgrim(pilgrim_id)) if self._permits else (),
        )
