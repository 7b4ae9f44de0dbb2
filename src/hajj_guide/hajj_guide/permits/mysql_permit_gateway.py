from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import add_pair, db_cursor, fetchall, fetchone
from .gateway import PermitGateway
from .model import Permit

logger = logging.getLogger(__name__)


def _to_permit(row: dict) -> Permit:
    return Permit(
        permit_id=int(row["PermitID"]),
        name=row["Name"],
        location=row["location"],
        service_type=row["serviceType"],
    )


class MySQLPermitGateway(PermitGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, permit_id: int, name: str, location: str, service_type: str) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                "INSERT INTO Permit(PermitID, Name, location, serviceType) VALUES(%s,%s,%s,%s)",
                (permit_id, name, location, service_type),
            )
            created = cur.rowcount == 1
        logger.info("Created permit %s (%s)", permit_id, name)
        return created

    def get_all(self) -> Sequence[Permit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT PermitID, Name, location, serviceType FROM Permit ORDER BY PermitID")
            return [_to_permit(r) for r in fetchall(cur)]

    def get_by_id(self, permit_id: int) -> Optional[Permit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT PermitID, Name, location, serviceType FROM Permit WHERE PermitID=%s", (permit_id,))
            row = fetchone(cur)
            return _to_permit(row) if row else None

    def assign_permit(self, pilgrim_id: int, permit_id: int) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            added = add_pair(cur, "PilgrimPermit", ("PilgrimID", "PermitID"), (pilgrim_id, permit_id))
        if added:
            logger.info("Granted permit %s to pilgrim %s", permit_id, pilgrim_id)
        return added

    def list_for_pilgrim(self, pilgrim_id: int) -> Sequence[Permit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.PermitID, p.Name, p.location, p.serviceType
                FROM Permit p
                JOIN PilgrimPermit pp ON pp.PermitID = p.PermitID
                WHERE pp.PilgrimID=%s
                ORDER BY p.PermitID
                """,
                (pilgrim_id,),
            )
            return [_to_permit(r) for r in fetchall(cur)]

    def list_pilgrim_ids(self, permit_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT PilgrimID FROM PilgrimPermit WHERE PermitID=%s ORDER BY PilgrimID", (permit_id,))
            return [int(r["PilgrimID"]) for r in fetchall(cur)]
