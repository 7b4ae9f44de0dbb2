from __future__ import annotations

import logging
from datetime import time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import add_pair, db_cursor, fetchall, fetchone, normalize_mysql_time
from .gateway import TransportScheduleGateway
from .model import TransportSchedule

logger = logging.getLogger(__name__)


def _to_schedule(row: dict) -> TransportSchedule:
    return TransportSchedule(
        schedule_id=int(row["ScheduleID"]),
        departure_time=normalize_mysql_time(row["departureTime"]),
        arrival_time=normalize_mysql_time(row["arrivalTime"]),
        route=row["route"],
        transport_type=row["TransportType"],
        admin_id=int(row["AdminID"]),
    )


class MySQLTransportScheduleGateway(TransportScheduleGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        schedule_id: int,
        departure_time: time,
        arrival_time: time,
        route: str,
        transport_type: str,
        admin_id: int,
    ) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                """
                INSERT INTO TransportSchedule(ScheduleID, departureTime, arrivalTime, route, TransportType, AdminID)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (schedule_id, departure_time, arrival_time, route, transport_type, admin_id),
            )
            created = cur.rowcount == 1
        logger.info("Created transport schedule %s (%s)", schedule_id, route)
        return created

    def get_all(self) -> Sequence[TransportSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ScheduleID, departureTime, arrivalTime, route, TransportType, AdminID
                FROM TransportSchedule
                ORDER BY departureTime, ScheduleID
                """
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: int) -> Optional[TransportSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ScheduleID, departureTime, arrivalTime, route, TransportType, AdminID
                FROM TransportSchedule
                WHERE ScheduleID=%s
                """,
                (schedule_id,),
            )
            row = fetchone(cur)
            return _to_schedule(row) if row else None

    def assign_pilgrim(self, pilgrim_id: int, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            added = add_pair(cur, "PilgrimTransport", ("PilgrimID", "ScheduleID"), (pilgrim_id, schedule_id))
        if added:
            logger.info("Assigned pilgrim %s to transport schedule %s", pilgrim_id, schedule_id)
        return added

    def list_for_pilgrim(self, pilgrim_id: int) -> Sequence[TransportSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.ScheduleID, t.departureTime, t.arrivalTime, t.route, t.TransportType, t.AdminID
                FROM TransportSchedule t
                JOIN PilgrimTransport pt ON pt.ScheduleID = t.ScheduleID
                WHERE pt.PilgrimID=%s
                ORDER BY t.departureTime, t.ScheduleID
                """,
                (pilgrim_id,),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def list_pilgrim_ids(self, schedule_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT PilgrimID FROM PilgrimTransport WHERE ScheduleID=%s ORDER BY PilgrimID",
                (schedule_id,),
            )
            return [int(r["PilgrimID"]) for r in fetchall(cur)]
