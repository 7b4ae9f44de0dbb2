from __future__ import annotations

from datetime import time, timedelta

import mysql.connector
import pytest
from mysql.connector.errors import get_mysql_exception

from hajj_guide.core.exceptions import (
    DuplicateKey,
    ForeignKeyMissing,
    IntegrityViolation,
    InvalidInput,
    StoreUnavailable,
    UniquenessViolation,
)
from hajj_guide.database.mysql_base import db_cursor, normalize_mysql_time, translate_error


def _integrity(errno, msg):
    return mysql.connector.errors.IntegrityError(msg=msg, errno=errno)


def test_translate_duplicate_primary_key():
    err = translate_error(_integrity(1062, "Duplicate entry '1001' for key 'Pilgrim.PRIMARY'"))
    assert isinstance(err, DuplicateKey)


def test_translate_duplicate_secondary_key():
    err = translate_error(_integrity(1062, "Duplicate entry '1001' for key 'MedicalProfile.uq_medical_pilgrim'"))
    assert isinstance(err, UniquenessViolation)


def test_translate_foreign_key_errors():
    assert isinstance(translate_error(_integrity(1452, "Cannot add or update a child row")), ForeignKeyMissing)
    assert isinstance(translate_error(_integrity(1451, "Cannot delete or update a parent row")), IntegrityViolation)


def test_translate_check_constraint():
    err = mysql.connector.errors.DatabaseError(msg="Check constraint 'chk_pilgrim_age' is violated.", errno=3819)
    assert isinstance(translate_error(err), InvalidInput)


def test_translate_lost_connection():
    err = mysql.connector.errors.OperationalError(msg="Lost connection to MySQL server during query", errno=2013)
    assert isinstance(translate_error(err), StoreUnavailable)


def test_translate_leaves_sql_mistakes_alone():
    err = mysql.connector.errors.ProgrammingError(msg="You have an error in your SQL syntax", errno=1064)
    assert translate_error(err) is err


def test_read_commits_without_explicit_transaction(fake_store):
    fake_store.script([{"x": 1}])

    with db_cursor(fake_store.handle) as (_, cur):
        cur.execute("SELECT 1 AS x")

    assert fake_store.conn.transactions == 0
    assert fake_store.conn.commits == 1


def test_write_is_bracketed_by_begin_and_commit(fake_store):
    fake_store.script(1)

    with db_cursor(fake_store.handle, write=True) as (_, cur):
        cur.execute("DELETE FROM Permit WHERE PermitID=%s", (1,))

    assert fake_store.conn.transactions == 1
    assert fake_store.conn.commits == 1
    assert fake_store.conn.rollbacks == 0


def test_store_error_rolls_back_and_is_translated(fake_store):
    fake_store.script(_integrity(1062, "Duplicate entry '5' for key 'PRIMARY'"))

    with pytest.raises(DuplicateKey):
        with db_cursor(fake_store.handle, write=True) as (_, cur):
            cur.execute("INSERT INTO Permit(PermitID) VALUES(%s)", (5,))

    assert fake_store.conn.rollbacks == 1
    assert fake_store.conn.commits == 0


def test_domain_error_inside_unit_rolls_back(fake_store):
    with pytest.raises(RuntimeError):
        with db_cursor(fake_store.handle, write=True):
            raise RuntimeError("boom")

    assert fake_store.conn.rollbacks == 1


def test_shared_connection_is_not_closed_by_units_of_work(fake_store):
    with db_cursor(fake_store.handle):
        pass
    with db_cursor(fake_store.handle):
        pass

    assert not fake_store.conn.closed
    assert len(fake_store.opened) == 1


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(8, 30)) == time(8, 30)
    assert normalize_mysql_time(timedelta(hours=14, minutes=5)) == time(14, 5)
    assert normalize_mysql_time("08:45:10") == time(8, 45, 10)
    with pytest.raises(ValueError):
        normalize_mysql_time("0845")


def test_translate_deadlock_and_lock_timeout():
    deadlock = get_mysql_exception(1213, "Deadlock found when trying to get lock", "40001")
    timeout = get_mysql_exception(1205, "Lock wait timeout exceeded", "HY000")

    assert isinstance(translate_error(deadlock), StoreUnavailable)
    assert isinstance(translate_error(timeout), StoreUnavailable)
