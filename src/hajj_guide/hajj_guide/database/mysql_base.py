from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import (
    DuplicateKey,
    ForeignKeyMissing,
    HajjGuideError,
    IntegrityViolation,
    InvalidInput,
    StoreUnavailable,
    UniquenessViolation,
)
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

_DUPLICATE = {errorcode.ER_DUP_ENTRY, errorcode.ER_DUP_KEY}
_MISSING_PARENT = {errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2}
_REFERENCED_CHILD = {errorcode.ER_ROW_IS_REFERENCED, errorcode.ER_ROW_IS_REFERENCED_2}
_CHECK_FAILED = {errorcode.ER_CHECK_CONSTRAINT_VIOLATED}
# Connection loss and lock contention; the caller may retry the whole unit of work.
_TRANSIENT = {
    errorcode.CR_CONNECTION_ERROR,
    errorcode.CR_CONN_HOST_ERROR,
    errorcode.CR_SERVER_GONE_ERROR,
    errorcode.CR_SERVER_LOST,
    errorcode.ER_LOCK_WAIT_TIMEOUT,
    errorcode.ER_LOCK_DEADLOCK,
}


def translate_error(exc: mysql.connector.Error) -> Exception:
    """Map a mysql-connector error onto the store error taxonomy.

    Errors outside the taxonomy (SQL mistakes) are returned unchanged.
    """
    errno = getattr(exc, "errno", None)
    message = getattr(exc, "msg", None) or str(exc)

    if errno in _DUPLICATE:
        # Secondary unique keys are named; the primary key is reported as PRIMARY.
        if "PRIMARY" in message:
            return DuplicateKey(message)
        return UniquenessViolation(message)
    if errno in _MISSING_PARENT:
        return ForeignKeyMissing(message)
    if errno in _REFERENCED_CHILD:
        return IntegrityViolation(message)
    if errno in _CHECK_FAILED:
        return InvalidInput(message)
    if errno in _TRANSIENT or isinstance(
        exc, (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError, mysql.connector.errors.PoolError)
    ):
        return StoreUnavailable(message)
    return exc


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as exc:
        # The failure that triggered the rollback is re-raised by the caller.
        logger.warning("Rollback failed: %s", exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, write: bool = False, dictionary: bool = True):
    """One unit of work: commit on success, roll back on any failure.

    ``write=True`` opens an explicit transaction first. Store errors leave as
    taxonomy errors (see ``translate_error``).
    """
    with conn_factory.connection() as conn:
        cur = None
        try:
            if write and not conn.in_transaction:
                conn.start_transaction()
            cur = conn.cursor(dictionary=dictionary)
            yield conn, cur
            conn.commit()
        except mysql.connector.Error as exc:
            _rollback(conn)
            translated = translate_error(exc)
            if isinstance(translated, HajjGuideError):
                logger.warning("Store operation failed (%s): %s", type(translated).__name__, exc)
                raise translated from exc
            raise
        except Exception:
            _rollback(conn)
            raise
        finally:
            if cur is not None:
                cur.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def row_exists(cur, sql: str, params: Sequence[Any]) -> bool:
    cur.execute(sql, tuple(params))
    return fetchone(cur) is not None


def pair_exists(cur, table: str, columns: Tuple[str, str], values: Tuple[int, int]) -> bool:
    left, right = columns
    return row_exists(cur, f"SELECT 1 AS found FROM {table} WHERE {left}=%s AND {right}=%s", values)


def add_pair(cur, table: str, columns: Tuple[str, str], values: Tuple[int, int]) -> bool:
    """Set-semantic association insert: True when added, False when the pair is already present.

    The composite primary key decides; no locking read precedes the insert.
    """
    left, right = columns
    try:
        cur.execute(f"INSERT INTO {table} ({left}, {right}) VALUES (%s, %s)", tuple(values))
    except mysql.connector.Error as exc:
        if exc.errno in _DUPLICATE:
            return False
        raise
    return cur.rowcount == 1


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
