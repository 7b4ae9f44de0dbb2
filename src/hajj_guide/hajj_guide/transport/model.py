from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class TransportSchedule:
    schedule_id: int
    departure_time: time
    arrival_time: time
    route: str
    transport_type: str
    admin_id: int
