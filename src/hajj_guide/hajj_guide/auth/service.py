from __future__ import annotations

import logging
from typing import Optional

from ..admins.gateway import AdminGateway
from ..admins.model import Admin
from ..common.validators import require_int
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, InvalidInput
from .session import Session

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: validate credentials and issue sessions for both actor classes."""

    def __init__(self, admins: AdminGateway):
        self._admins = admins

    def login_admin(self, admin_id, password: str) -> Session:
        try:
            admin_id = require_int(admin_id, "Admin ID")
        except InvalidInput:
            raise AuthenticationError("Invalid ID format")

        if not isinstance(password, str) or not password or not self._admins.validate_admin(admin_id, password):
            raise AuthenticationError("Invalid admin ID or password")

        logger.info("Admin %s logged in", admin_id)
        return Session(role=Role.ADMIN, id=admin_id)

    def login_pilgrim(self, pilgrim_id) -> Session:
        # Pilgrims log in by id alone; there is no pilgrim credential in the schema.
        try:
            pilgrim_id = require_int(pilgrim_id, "Pilgrim ID")
        except InvalidInput:
            raise AuthenticationError("Invalid ID format")

        if not self._admins.validate_pilgrim(pilgrim_id):
            raise AuthenticationError("Invalid login")

        logger.info("Pilgrim %s logged in", pilgrim_id)
        return Session(role=Role.PILGRIM, id=pilgrim_id)

    def current_admin(self, session: Optional[Session]) -> Optional[Admin]:
        if session is None or not session.is_admin:
            return None
        return self._admins.get_admin_by_id(session.id)
