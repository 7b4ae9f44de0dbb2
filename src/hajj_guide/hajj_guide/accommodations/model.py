from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Accommodation:
    """Lodging with a finite number of pilgrim places."""

    accommodation_id: int
    hotel_name: str
    room_type: str
    capacity: int
    address: str
    admin_id: int
