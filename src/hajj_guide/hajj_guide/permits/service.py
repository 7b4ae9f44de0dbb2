from __future__ import annotations

from typing import Optional, Sequence

from ..auth.session import Session, require_admin, require_self_or_admin
from ..common.validators import require_non_empty, require_positive_id
from .gateway import PermitGateway
from .model import Permit


class PermitService:
    def __init__(self, permits: PermitGateway):
        self._permits = permits

    def create(self, *, session: Session, permit_id, name: str, location: str, service_type: str) -> Permit:
        require_admin(session)
        permit = Permit(
            permit_id=require_positive_id(permit_id, "Permit ID"),
            name=require_non_empty(name, "Permit name"),
            location=require_non_empty(location, "Location"),
            service_type=require_non_empty(service_type, "Service type"),
        )
        self._permits.create(
            permit_id=permit.permit_id,
            name=permit.name,
            location=permit.location,
            service_type=permit.service_type,
        )
        return permit

    def list_all(self, *, session: Session) -> Sequence[Permit]:
        require_admin(session)
        return self._permits.get_all()

    def get(self, *, session: Session, permit_id) -> Optional[Permit]:
        require_admin(session)
        return self._permits.get_by_id(require_positive_id(permit_id, "Permit ID"))

    def grant(self, *, session: Session, pilgrim_id, permit_id) -> bool:
        require_admin(session)
        return self._permits.assign_permit(
            require_positive_id(pilgrim_id, "Pilgrim ID"),
            require_positive_id(permit_id, "Permit ID"),
        )

    def for_pilgrim(self, *, session: Session, pilgrim_id) -> Sequence[Permit]:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        require_self_or_admin(session, pilgrim_id)
        return self._permits.list_for_pilgrim(pilgrim_id)
