from __future__ import annotations

from typing import Optional, Sequence

from ..auth.session import Session, require_admin, require_self_or_admin
from ..common.validators import require_in_range, require_non_empty, require_positive_id
from ..core.constants import MIN_ACCOMMODATION_CAPACITY
from .gateway import AccommodationGateway
from .model import Accommodation


class AccommodationService:
    def __init__(self, accommodations: AccommodationGateway):
        self._accommodations = accommodations

    def create(
        self,
        *,
        session: Session,
        accommodation_id,
        hotel_name: str,
        room_type: str,
        capacity,
        address: str,
    ) -> Accommodation:
        admin_id = require_admin(session)
        accommodation = Accommodation(
            accommodation_id=require_positive_id(accommodation_id, "Accommodation ID"),
            hotel_name=require_non_empty(hotel_name, "Hotel name"),
            room_type=require_non_empty(room_type, "Room type"),
            capacity=require_in_range(capacity, "Capacity", minimum=MIN_ACCOMMODATION_CAPACITY),
            address=require_non_empty(address, "Address"),
            admin_id=admin_id,
        )
        self._accommodations.create(
            accommodation_id=accommodation.accommodation_id,
            hotel_name=accommodation.hotel_name,
            room_type=accommodation.room_type,
            capacity=accommodation.capacity,
            address=accommodation.address,
            admin_id=accommodation.admin_id,
        )
        return accommodation

    def list_all(self, *, session: Session) -> Sequence[Accommodation]:
        require_admin(session)
        return self._accommodations.get_all()

    def get(self, *, session: Session, accommodation_id) -> Optional[Accommodation]:
        require_admin(session)
        return self._accommodations.get_by_id(require_positive_id(accommodation_id, "Accommodation ID"))

    def assign(self, *, session: Session, pilgrim_id, accommodation_id) -> bool:
        require_admin(session)
        return self._accommodations.assign_pilgrim(
            require_positive_id(pilgrim_id, "Pilgrim ID"),
            require_positive_id(accommodation_id, "Accommodation ID"),
        )

    def for_pilgrim(self, *, session: Session, pilgrim_id) -> Sequence[Accommodation]:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        require_self_or_admin(session, pilgrim_id)
        return self._accommodations.list_for_pilgrim(pilgrim_id)
