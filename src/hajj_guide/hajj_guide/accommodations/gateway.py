from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Accommodation


class AccommodationGateway(Protocol):
    def create(
        self,
        *,
        accommodation_id: int,
        hotel_name: str,
        room_type: str,
        capacity: int,
        address: str,
        admin_id: int,
    ) -> bool:
        raise NotImplementedError

    def get_all(self) -> Sequence[Accommodation]:
        raise NotImplementedError

    def get_by_id(self, accommodation_id: int) -> Optional[Accommodation]:
        raise NotImplementedError

    def assign_pilgrim(self, pilgrim_id: int, accommodation_id: int) -> bool:
        """Add the pilgrim to the accommodation.

        Returns False if the pair already exists; raises CapacityExceeded when full.
        """

        raise NotImplementedError

    def list_for_pilgrim(self, pilgrim_id: int) -> Sequence[Accommodation]:
        raise NotImplementedError

    def list_pilgrim_ids(self, accommodation_id: int) -> Sequence[int]:
        raise NotImplementedError
