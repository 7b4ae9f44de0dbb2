from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Pilgrim


class PilgrimGateway(Protocol):
    """Persistence interface for Pilgrim.

    Services depend on this interface, never on a concrete store.
    """

    def create(
        self,
        *,
        name: str,
        pilgrim_id: int,
        phone: str,
        nationality: str,
        special_need: str,
        allergies: str,
        age: int,
    ) -> bool:
        raise NotImplementedError

    def get_all(self) -> Sequence[Pilgrim]:
        raise NotImplementedError

    def get_by_id(self, pilgrim_id: int) -> Optional[Pilgrim]:
        """Return the pilgrim, or None when the id is unknown."""

        raise NotImplementedError

    def update(
        self,
        *,
        pilgrim_id: int,
        name: str,
        phone: str,
        nationality: str,
        special_need: str,
        allergies: str,
        age: int,
    ) -> bool:
        raise NotImplementedError

    def delete(self, pilgrim_id: int) -> bool:
        raise NotImplementedError

    def exists(self, pilgrim_id: int) -> bool:
        raise NotImplementedError
