from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Permit:
    """Named access right to a location or service (e.g. Arafat access)."""

    permit_id: int
    name: str
    location: str
    service_type: str
