from __future__ import annotations

from typing import Optional, Sequence

from ..auth.session import Session, require_admin, require_self_or_admin
from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_choice, require_non_empty, require_positive_id
from ..core.enums import TransportType
from .gateway import TransportScheduleGateway
from .model import TransportSchedule


class TransportService:
    def __init__(self, schedules: TransportScheduleGateway):
        self._schedules = schedules

    def create(
        self,
        *,
        session: Session,
        schedule_id,
        departure_time,
        arrival_time,
        route: str,
        transport_type: str,
    ) -> TransportSchedule:
        admin_id = require_admin(session)
        schedule = TransportSchedule(
            schedule_id=require_positive_id(schedule_id, "Schedule ID"),
            departure_time=parse_hhmm(departure_time),
            arrival_time=parse_hhmm(arrival_time),
            route=require_non_empty(route, "Route"),
            transport_type=require_choice(transport_type, TransportType, "Transport type").value,
            admin_id=admin_id,
        )
        # Arrival before departure is allowed: overnight trips cross midnight.
        self._schedules.create(
            schedule_id=schedule.schedule_id,
            departure_time=schedule.departure_time,
            arrival_time=schedule.arrival_time,
            route=schedule.route,
            transport_type=schedule.transport_type,
            admin_id=schedule.admin_id,
        )
        return schedule

    def list_all(self, *, session: Session) -> Sequence[TransportSchedule]:
        require_admin(session)
        return self._schedules.get_all()

    def get(self, *, session: Session, schedule_id) -> Optional[TransportSchedule]:
        require_admin(session)
        return self._schedules.get_by_id(require_positive_id(schedule_id, "Schedule ID"))

    def assign(self, *, session: Session, pilgrim_id, schedule_id) -> bool:
        require_admin(session)
        return self._schedules.assign_pilgrim(
            require_positive_id(pilgrim_id, "Pilgrim ID"),
            require_positive_id(schedule_id, "Schedule ID"),
        )

    def for_pilgrim(self, *, session: Session, pilgrim_id) -> Sequence[TransportSchedule]:
        pilgrim_id = require_positive_id(pilgrim_id, "Pilgrim ID")
        require_self_or_admin(session, pilgrim_id)
        return self._schedules.list_for_pilgrim(pilgrim_id)
