from __future__ import annotations

import mysql.connector
from mysql.connector.errors import get_mysql_exception
import pytest

from hajj_guide.core.exceptions import DuplicateKey, IntegrityViolation, NotFound, StoreUnavailable
from hajj_guide.database.connection import DatabaseConnection
from hajj_guide.pilgrims.model import Pilgrim
from hajj_guide.pilgrims.mysql_pilgrim_gateway import MySQLPilgrimGateway

from fakes import TEST_DB

AHMED_ROW = {
    "PilgrimID": 1001,
    "PilgrimName": "Ahmed",
    "Phone": "0501234567",
    "Nationality": "Saudi",
    "specialNeed": "",
    "allergies": "",
    "pilgrimAge": 30,
}

AHMED = dict(
    name="Ahmed",
    pilgrim_id=1001,
    phone="0501234567",
    nationality="Saudi",
    special_need="",
    allergies="",
    age=30,
)


def test_create_inserts_inside_a_transaction(fake_store):
    fake_store.script(1)
    gateway = MySQLPilgrimGateway(fake_store.handle)

    assert gateway.create(**AHMED) is True

    assert len(fake_store.conn.executed) == 1
    sql, params = fake_store.conn.executed[0]
    assert sql.startswith("INSERT INTO Pilgrim")
    assert params == ("Ahmed", 1001, "0501234567", "Saudi", "", "", 30)
    assert fake_store.conn.transactions == 1
    assert fake_store.conn.commits == 1


def test_create_duplicate_id_raises_and_rolls_back(fake_store):
    fake_store.script(
        mysql.connector.errors.IntegrityError(msg="Duplicate entry '1001' for key 'Pilgrim.PRIMARY'", errno=1062),
    )

    with pytest.raises(DuplicateKey):
        MySQLPilgrimGateway(fake_store.handle).create(**AHMED)

    assert fake_store.conn.rollbacks == 1
    assert fake_store.conn.commits == 0


def test_create_losing_a_deadlock_is_store_unavailable(fake_store):
    fake_store.script(get_mysql_exception(1213, "Deadlock found when trying to get lock", "40001"))

    with pytest.raises(StoreUnavailable):
        MySQLPilgrimGateway(fake_store.handle).create(**AHMED)
    assert fake_store.conn.rollbacks == 1


def test_get_by_id_maps_row(fake_store):
    fake_store.script([AHMED_ROW])

    pilgrim = MySQLPilgrimGateway(fake_store.handle).get_by_id(1001)

    assert pilgrim == Pilgrim(1001, "Ahmed", "0501234567", "Saudi", "", "", 30)
    assert fake_store.conn.transactions == 0


def test_get_by_id_absent_returns_none(fake_store):
    fake_store.script([])
    assert MySQLPilgrimGateway(fake_store.handle).get_by_id(9999) is None


def test_get_by_id_tolerates_null_optional_columns(fake_store):
    fake_store.script([dict(AHMED_ROW, specialNeed=None, allergies=None)])
    pilgrim = MySQLPilgrimGateway(fake_store.handle).get_by_id(1001)
    assert pilgrim.special_need == ""
    assert pilgrim.allergies == ""


def test_get_all_maps_every_row(fake_store):
    fake_store.script([AHMED_ROW, dict(AHMED_ROW, PilgrimID=1002, PilgrimName="Fatima")])

    pilgrims = MySQLPilgrimGateway(fake_store.handle).get_all()

    assert {p.pilgrim_id for p in pilgrims} == {1001, 1002}


def test_update_keeps_id_in_where_clause(fake_store):
    fake_store.script([AHMED_ROW], 1)
    changes = dict(AHMED, name="Ahmed Ali", age=31)

    assert MySQLPilgrimGateway(fake_store.handle).update(**changes) is True

    sql, params = fake_store.conn.executed[1]
    assert sql.startswith("UPDATE Pilgrim SET")
    assert params[-1] == 1001
    assert params[0] == "Ahmed Ali"


def test_update_absent_raises_not_found(fake_store):
    fake_store.script([])

    with pytest.raises(NotFound):
        MySQLPilgrimGateway(fake_store.handle).update(**AHMED)
    assert fake_store.conn.rollbacks == 1


def test_delete_refuses_when_dependents_exist(fake_store):
    fake_store.script(
        [AHMED_ROW],
        [{"MedicalProfile": 1, "PilgrimTransport": 0, "PilgrimAccommodation": 2, "PilgrimPermit": 0}],
    )

    with pytest.raises(IntegrityViolation) as exc_info:
        MySQLPilgrimGateway(fake_store.handle).delete(1001)

    assert "MedicalProfile" in str(exc_info.value)
    assert not any(sql.startswith("DELETE") for sql in fake_store.conn.statements())
    assert fake_store.conn.rollbacks == 1


def test_delete_cascades_when_enabled(fake_store):
    fake_store.script(
        [AHMED_ROW],
        [{"MedicalProfile": 1, "PilgrimTransport": 0, "PilgrimAccommodation": 2, "PilgrimPermit": 0}],
        1,
        2,
        1,
    )

    assert MySQLPilgrimGateway(fake_store.handle, cascade_delete=True).delete(1001) is True

    deletes = [sql for sql in fake_store.conn.statements() if sql.startswith("DELETE")]
    assert deletes == [
        "DELETE FROM MedicalProfile WHERE PilgrimID=%s",
        "DELETE FROM PilgrimAccommodation WHERE PilgrimID=%s",
        "DELETE FROM Pilgrim WHERE PilgrimID=%s",
    ]
    assert fake_store.conn.commits == 1


def test_delete_without_dependents(fake_store):
    fake_store.script(
        [AHMED_ROW],
        [{"MedicalProfile": 0, "PilgrimTransport": 0, "PilgrimAccommodation": 0, "PilgrimPermit": 0}],
        1,
    )
    assert MySQLPilgrimGateway(fake_store.handle).delete(1001) is True


def test_delete_absent_raises_not_found(fake_store):
    fake_store.script([])
    with pytest.raises(NotFound):
        MySQLPilgrimGateway(fake_store.handle).delete(1001)


def test_unreachable_store_raises_store_unavailable():
    def refuse(**kwargs):
        raise mysql.connector.errors.InterfaceError(msg="Can't connect to MySQL server", errno=2003)

    gateway = MySQLPilgrimGateway(DatabaseConnection(TEST_DB, connector=refuse))
    with pytest.raises(StoreUnavailable):
        gateway.get_all()
