from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import DuplicateKey, ForeignKeyMissing, NotFound, UniquenessViolation
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, row_exists
from .gateway import MedicalProfileGateway
from .model import MedicalProfile

logger = logging.getLogger(__name__)

_SELECT = "SELECT ProfileID, bloodType, medications, Medical_History, PilgrimID, AdminID FROM MedicalProfile"


def _to_profile(row: dict) -> MedicalProfile:
    return MedicalProfile(
        profile_id=int(row["ProfileID"]),
        blood_type=row["bloodType"],
        medications=row.get("medications") or "",
        medical_history=row.get("Medical_History") or "",
        pilgrim_id=int(row["PilgrimID"]),
        admin_id=int(row["AdminID"]),
    )


def _require_admin_row(cur, admin_id: int) -> None:
    if not row_exists(cur, "SELECT AdminID FROM Admin WHERE AdminID=%s", (admin_id,)):
        raise ForeignKeyMissing(f"Admin {admin_id} not found")


class MySQLMedicalProfileGateway(MedicalProfileGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            # Plain reads order the errors; a concurrent insert is still rejected by the keys.
            if row_exists(cur, "SELECT ProfileID FROM MedicalProfile WHERE ProfileID=%s", (profile_id,)):
                raise DuplicateKey(f"Medical profile {profile_id} already exists")
            if not row_exists(cur, "SELECT PilgrimID FROM Pilgrim WHERE PilgrimID=%s", (pilgrim_id,)):
                raise ForeignKeyMissing(f"Pilgrim {pilgrim_id} not found")
            _require_admin_row(cur, admin_id)
            if row_exists(cur, "SELECT ProfileID FROM MedicalProfile WHERE PilgrimID=%s", (pilgrim_id,)):
                raise UniquenessViolation(f"Pilgrim {pilgrim_id} already has a medical profile")

            cur.execute(
                """
                INSERT INTO MedicalProfile(ProfileID, bloodType, medications, Medical_History, PilgrimID, AdminID)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (profile_id, blood_type, medications, medical_history, pilgrim_id, admin_id),
            )
            created = cur.rowcount == 1
        logger.info("Created medical profile %s for pilgrim %s (admin %s)", profile_id, pilgrim_id, admin_id)
        return created

    def get_by_pilgrim_id(self, pilgrim_id: int) -> Optional[MedicalProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE PilgrimID=%s", (pilgrim_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_id(self, profile_id: int) -> Optional[MedicalProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE ProfileID=%s", (profile_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def update(
        self,
        *,
        profile_id: int,
        blood_type: str,
        medications: str,
        medical_history: str,
        admin_id: int,
    ) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            if not row_exists(cur, "SELECT ProfileID FROM MedicalProfile WHERE ProfileID=%s FOR UPDATE", (profile_id,)):
                raise NotFound(f"Medical profile {profile_id} not found")
            _require_admin_row(cur, admin_id)
            cur.execute(
                """
                UPDATE MedicalProfile
                SET bloodType=%s, medications=%s, Medical_History=%s, AdminID=%s
                WHERE ProfileID=%s
                """,
                (blood_type, medications, medical_history, admin_id, profile_id),
            )
            updated = cur.rowcount == 1
        logger.info("Updated medical profile %s (admin %s)", profile_id, admin_id)
        return updated
