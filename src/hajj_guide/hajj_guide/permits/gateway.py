from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Permit


class PermitGateway(Protocol):
    def create(self, *, permit_id: int, name: str, location: str, service_type: str) -> bool:
        raise NotImplementedError

    def get_all(self) -> Sequence[Permit]:
        raise NotImplementedError

    def get_by_id(self, permit_id: int) -> Optional[Permit]:
        raise NotImplementedError

    def assign_permit(self, pilgrim_id: int, permit_id: int) -> bool:
        """Grant the permit; False if the pilgrim already holds it."""

        raise NotImplementedError

    def list_for_pilgrim(self, pilgrim_id: int) -> Sequence[Permit]:
        raise NotImplementedError

    def list_pilgrim_ids(self, permit_id: int) -> Sequence[int]:
        raise NotImplementedError
