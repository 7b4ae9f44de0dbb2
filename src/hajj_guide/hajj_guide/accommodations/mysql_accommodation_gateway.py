from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import CapacityExceeded, ForeignKeyMissing
from ..database.connection import DatabaseConnection
from ..database.mysql_base import add_pair, db_cursor, fetchall, fetchone, pair_exists
from .gateway import AccommodationGateway
from .model import Accommodation

logger = logging.getLogger(__name__)

_PAIR_TABLE = "PilgrimAccommodation"
_PAIR_COLUMNS = ("PilgrimID", "AccommodationID")


def _to_accommodation(row: dict) -> Accommodation:
    return Accommodation(
        accommodation_id=int(row["AccommodationID"]),
        hotel_name=row["HotelName"],
        room_type=row["roomType"],
        capacity=int(row["capacity"]),
        address=row["address"],
        admin_id=int(row["AdminID"]),
    )


class MySQLAccommodationGateway(AccommodationGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            cur.execute(
                """
                INSERT INTO Accommodation(AccommodationID, HotelName, roomType, capacity, address, AdminID)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (accommodation_id, hotel_name, room_type, capacity, address, admin_id),
            )
            created = cur.rowcount == 1
        logger.info("Created accommodation %s (capacity %s)", accommodation_id, capacity)
        return created

    def get_all(self) -> Sequence[Accommodation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT AccommodationID, HotelName, roomType, capacity, address, AdminID
                FROM Accommodation
                ORDER BY AccommodationID
                """
            )
            return [_to_accommodation(r) for r in fetchall(cur)]

    def get_by_id(self, accommodation_id: int) -> Optional[Accommodation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT AccommodationID, HotelName, roomType, capacity, address, AdminID
                FROM Accommodation
                WHERE AccommodationID=%s
                """,
                (accommodation_id,),
            )
            row = fetchone(cur)
            return _to_accommodation(row) if row else None

    def assign_pilgrim(self, pilgrim_id: int, accommodation_id: int) -> bool:
        with db_cursor(self._conn_factory, write=True) as (_, cur):
            # Locking the accommodation row serializes concurrent assignments against its capacity.
            cur.execute(
                "SELECT capacity FROM Accommodation WHERE AccommodationID=%s FOR UPDATE",
                (accommodation_id,),
            )
            row = fetchone(cur)
            if not row:
                raise ForeignKeyMissing(f"Accommodation {accommodation_id} not found")

            values = (pilgrim_id, accommodation_id)
            if pair_exists(cur, _PAIR_TABLE, _PAIR_COLUMNS, values):
                return False

            capacity = int(row["capacity"])
            cur.execute(
                "SELECT COUNT(*) AS assigned FROM PilgrimAccommodation WHERE AccommodationID=%s",
                (accommodation_id,),
            )
            assigned = int((fetchone(cur) or {}).get("assigned") or 0)
            if assigned >= capacity:
                raise CapacityExceeded(f"Accommodation {accommodation_id} is full ({assigned}/{capacity})")

            added = add_pair(cur, _PAIR_TABLE, _PAIR_COLUMNS, values)
        if added:
            logger.info("Assigned pilgrim %s to accommodation %s", pilgrim_id, accommodation_id)
        return added

    def list_for_pilgrim(self, pilgrim_id: int) -> Sequence[Accommodation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.AccommodationID, a.HotelName, a.roomType, a.capacity, a.address, a.AdminID
                FROM Accommodation a
                JOIN PilgrimAccommodation pa ON pa.AccommodationID = a.AccommodationID
                WHERE pa.PilgrimID=%s
                ORDER BY a.AccommodationID
                """,
                (pilgrim_id,),
            )
            return [_to_accommodation(r) for r in fetchall(cur)]

    def list_pilgrim_ids(self, accommodation_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT PilgrimID FROM PilgrimAccommodation WHERE AccommodationID=%s ORDER BY PilgrimID",
                (accommodation_id,),
            )
            return [int(r["PilgrimID"]) for r in fetchall(cur)]
