from __future__ import annotations

import hmac
import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, row_exists
from .gateway import AdminGateway
from .model import Admin

logger = logging.getLogger(__name__)

# Prefixes written by werkzeug.security.generate_password_hash.
_HASH_METHODS = ("scrypt:", "pbkdf2:")


def password_matches(stored: Optional[str], password: str) -> bool:
    """Compare a login password with the stored Admin.Password value.

    Hashed values are checked with werkzeug; anything else is a legacy
    plaintext row and is compared in constant time.
    """
    if not stored or not isinstance(password, str):
        return False
    if stored.startswith(_HASH_METHODS):
        try:
            return check_password_hash(stored, password)
        except ValueError:
            return False
    return hmac.compare_digest(stored.encode("utf-8"), password.encode("utf-8"))


class MySQLAdminGateway(AdminGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def validate_admin(self, admin_id: int, password: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT Password FROM Admin WHERE AdminID=%s", (admin_id,))
            row = fetchone(cur)
        ok = bool(row) and password_matches(row["Password"], password)
        if not ok:
            logger.info("Rejected admin login for %s", admin_id)
        return ok

    def validate_pilgrim(self, pilgrim_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return row_exists(cur, "SELECT PilgrimID FROM Pilgrim WHERE PilgrimID=%s", (pilgrim_id,))

    def get_admin_by_id(self, admin_id: int) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT AdminID, AdminName, phone, Email FROM Admin WHERE AdminID=%s", (admin_id,))
            row = fetchone(cur)
            if not row:
                return None
            return Admin(
                admin_id=int(row["AdminID"]),
                name=row["AdminName"],
                phone=row.get("phone") or "",
                email=row.get("Email") or "",
            )

    def create_admin(self, *, admin_id: int, name: str, phone: str, email: str, password: str) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                "INSERT INTO Admin(AdminID, AdminName, phone, Email, Password) VALUES(%s,%s,%s,%s,%s)",
                (admin_id, name, phone, email, generate_password_hash(password)),
            )
            created = cur.rowcount == 1
        logger.info("Created admin %s", admin_id)
        return created
