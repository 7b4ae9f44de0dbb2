from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


@dataclass(frozen=True)
class Session:
    """Authenticated identity handed to the presentation layer after login."""

    role: Role
    id: int
    issued_at: datetime = field(default_factory=now_local)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {"role": self.role.value, "id": self.id, "issued_at": self.issued_at.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        return cls(
            role=Role(data["role"]),
            id=int(data["id"]),
            issued_at=datetime.fromisoformat(data["issued_at"]),
        )


def require_admin(session: Optional[Session]) -> int:
    """Return the admin id that authors a write, or refuse."""
    if session is None or not session.is_admin:
        raise AuthorizationError("Administrator login required")
    return session.id


def require_self_or_admin(session: Optional[Session], pilgrim_id: int) -> None:
    if session is None:
        raise AuthorizationError("Login required")
    if session.is_admin:
        return
    if session.role == Role.PILGRIM and session.id == int(pilgrim_id):
        return
    raise AuthorizationError("You can only access your own records")


class SessionContext:
    """Per-window session state: Unauthenticated -> Authenticated -> Unauthenticated.

    No expiry. Gateways never look at this; callers read the admin id from it.
    """

    def __init__(self):
        self._current: Optional[Session] = None

    @property
    def current(self) -> Optional[Session]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def login(self, session: Session) -> Session:
        self._current = session
        return session

    def logout(self) -> None:
        self._current = None

    def require_admin(self) -> int:
        return require_admin(self._current)

    def require_pilgrim(self) -> int:
        if self._current is None or self._current.role != Role.PILGRIM:
            raise AuthorizationError("Pilgrim login required")
        return self._current.id
