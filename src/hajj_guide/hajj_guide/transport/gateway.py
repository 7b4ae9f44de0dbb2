from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import TransportSchedule


class TransportScheduleGateway(Protocol):
    def create(
        self,
        *,
        schedule_id: int,
        departure_time: time,
        arrival_time: time,
        route: str,
        transport_type: str,
        admin_id: int,
    ) -> bool:
        raise NotImplementedError

    def get_all(self) -> Sequence[TransportSchedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[TransportSchedule]:
        raise NotImplementedError

    def assign_pilgrim(self, pilgrim_id: int, schedule_id: int) -> bool:
        """Book the pilgrim on the schedule; False if already booked."""

        raise NotImplementedError

    def list_for_pilgrim(self, pilgrim_id: int) -> Sequence[TransportSchedule]:
        raise NotImplementedError

    def list_pilgrim_ids(self, schedule_id: int) -> Sequence[int]:
        raise NotImplementedError
