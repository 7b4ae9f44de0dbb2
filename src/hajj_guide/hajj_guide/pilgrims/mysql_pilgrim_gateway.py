from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import IntegrityViolation, NotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, row_exists
from .gateway import PilgrimGateway
from .model import Pilgrim

logger = logging.getLogger(__name__)

# Tables holding rows that reference a pilgrim, in the order they are cleared on cascade.
DEPENDENT_TABLES = ("MedicalProfile", "PilgrimTransport", "PilgrimAccommodation", "PilgrimPermit")


def _to_pilgrim(row: dict) -> Pilgrim:
    return Pilgrim(
        pilgrim_id=int(row["PilgrimID"]),
        name=row["PilgrimName"],
        phone=row["Phone"],
        nationality=row["Nationality"],
        special_need=row.get("specialNeed") or "",
        allergies=row.get("allergies") or "",
        age=int(row["pilgrimAge"]),
    )


class MySQLPilgrimGateway(PilgrimGateway):
    def __init__(self, conn_factory: DatabaseConnection, *, cascade_delete: bool = False):
        self._conn_factory = conn_factory
        self._cascade_delete = cascade_delete

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
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                """
                INSERT INTO Pilgrim(PilgrimName, PilgrimID, Phone, Nationality, specialNeed, allergies, pilgrimAge)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, pilgrim_id, phone, nationality, special_need, allergies, age),
            )
            created = cur.rowcount == 1
        logger.info("Created pilgrim %s", pilgrim_id)
        return created

    def get_all(self) -> Sequence[Pilgrim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT PilgrimID, PilgrimName, Phone, Nationality, specialNeed, allergies, pilgrimAge
                FROM Pilgrim
                ORDER BY PilgrimID
                """
            )
            return [_to_pilgrim(r) for r in fetchall(cur)]

    def get_by_id(self, pilgrim_id: int) -> Optional[Pilgrim]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT PilgrimID, PilgrimName, Phone, Nationality, specialNeed, allergies, pilgrimAge
                FROM Pilgrim
                WHERE PilgrimID=%s
                """,
                (pilgrim_id,),
            )
            row = fetchone(cur)
            return _to_pilgrim(row) if row else None

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
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            if not row_exists(cur, "SELECT PilgrimID FROM Pilgrim WHERE PilgrimID=%s FOR UPDATE", (pilgrim_id,)):
                raise NotFound(f"Pilgrim {pilgrim_id} not found")
            cur.execute(
                """
                UPDATE Pilgrim
                SET PilgrimName=%s, Phone=%s, Nationality=%s, specialNeed=%s, allergies=%s, pilgrimAge=%s
                WHERE PilgrimID=%s
                """,
                (name, phone, nationality, special_need, allergies, age, pilgrim_id),
            )
            updated = cur.rowcount == 1
        logger.info("Updated pilgrim %s", pilgrim_id)
        return updated

    def delete(self, pilgrim_id: int) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            if not row_exists(cur, "SELECT PilgrimID FROM Pilgrim WHERE PilgrimID=%s FOR UPDATE", (pilgrim_id,)):
                raise NotFound(f"Pilgrim {pilgrim_id} not found")

            dependents = self._count_dependents(cur, pilgrim_id)
            if dependents:
                if not self._cascade_delete:
                    listed = ", ".join(f"{table}={count}" for table, count in dependents.items())
                    raise IntegrityViolation(f"Pilgrim {pilgrim_id} still has dependent rows ({listed})")
                for table in dependents:
                    cur.execute(f"DELETE FROM {table} WHERE PilgrimID=%s", (pilgrim_id,))

            cur.execute("DELETE FROM Pilgrim WHERE PilgrimID=%s", (pilgrim_id,))
            deleted = cur.rowcount == 1
        logger.info("Deleted pilgrim %s (cascade=%s)", pilgrim_id, bool(dependents))
        return deleted

    def exists(self, pilgrim_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return row_exists(cur, "SELECT PilgrimID FROM Pilgrim WHERE PilgrimID=%s", (pilgrim_id,))

    @staticmethod
    def _count_dependents(cur, pilgrim_id: int) -> dict:
        selects = ", ".join(
            f"(SELECT COUNT(*) FROM {table} WHERE PilgrimID=%s) AS {table}" for table in DEPENDENT_TABLES
        )
        cur.execute(f"SELECT {selects}", (pilgrim_id,) * len(DEPENDENT_TABLES))
        row = fetchone(cur) or {}
        return {table: int(row.get(table) or 0) for table in DEPENDENT_TABLES if int(row.get(table) or 0) > 0}
