from __future__ import annotations

from typing import Optional, Protocol

from .model import Admin


class AdminGateway(Protocol):
    def validate_admin(self, admin_id: int, password: str) -> bool:
        raise NotImplementedError

    def validate_pilgrim(self, pilgrim_id: int) -> bool:
        """Pilgrim login check: the id exists. No credential is involved."""

        raise NotImplementedError

    def get_admin_by_id(self, admin_id: int) -> Optional[Admin]:
        raise NotImplementedError

    def create_admin(self, *, admin_id: int, name: str, phone: str, email: str, password: str) -> bool:
        raise NotImplementedError
