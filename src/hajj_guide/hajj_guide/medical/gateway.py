from __future__ import annotations

from typing import Optional, Protocol

from .model import MedicalProfile


class MedicalProfileGateway(Protocol):
    """Persistence interface for MedicalProfile (one profile per pilgrim)."""

    def create(
        self,
        *,
        profile_id: int,
        blood_type: str,
        medications: str,
        medical_history: str,
        pilgrim_id: int,
        admin_id: int,
    ) -> bool:
        raise NotImplementedError

    def get_by_pilgrim_id(self, pilgrim_id: int) -> Optional[MedicalProfile]:
        raise NotImplementedError

    def get_by_id(self, profile_id: int) -> Optional[MedicalProfile]:
        raise NotImplementedError

    def update(
        self,
        *,
        profile_id: int,
        blood_type: str,
        medications: str,
        medical_history: str,
        admin_id: int,
    ) -> bool:
        raise NotImplementedError
