from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MedicalProfile:
    """Clinical attributes of one pilgrim; admin_id is the last author."""

    profile_id: int
    blood_type: str
    medications: str
    medical_history: str
    pilgrim_id: int
    admin_id: int
