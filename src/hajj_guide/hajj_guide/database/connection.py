from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

import mysql.connector
from mysql.connector import pooling
from mysql.connector.constants import ClientFlag

from ..core.constants import DEFAULT_DB_NAME, DEFAULT_DB_PORT, DEFAULT_POOL_WAIT_SECONDS
from ..core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", DEFAULT_DB_PORT)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", DEFAULT_DB_NAME)),
            pool_size=int(db_config.get("pool_size", 0) or 0),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide handle to the relational store.

    With ``pool_size == 0`` the handle owns one shared connection, opened on the
    first ``acquire`` and closed by ``release``. Units of work run under the
    handle's lock so the shared connection is never used by two threads at once.

    With ``pool_size > 0`` every unit of work borrows its own connection from a
    mysql-connector pool and returns it on exit. The pool itself never waits, so
    units of work queue on a semaphore sized to the pool and give up with
    ``StoreUnavailable`` only after ``pool_wait`` seconds.
    """

    _instances: Dict[DBConfig, "DatabaseConnection"] = {}
    _instances_lock = threading.Lock()

    def __init__(
        self,
        config: DBConfig,
        *,
        connector: Optional[Callable[..., Any]] = None,
        pool_wait: float = DEFAULT_POOL_WAIT_SECONDS,
    ):
        self._config = config
        self._connector = connector or mysql.connector.connect
        self._lock = threading.RLock()
        self._conn = None
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_wait = pool_wait
        self._slots = threading.BoundedSemaphore(config.pool_size) if config.pool_size > 0 else None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instances_lock:
            instance = cls._instances.get(config)
            if instance is None:
                instance = DatabaseConnection(config)
                cls._instances[config] = instance
            return instance

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def pooled(self) -> bool:
        return self._config.pool_size > 0

    def _connect_kwargs(self) -> dict:
        return {
            "host": self._config.host,
            "port": int(self._config.port),
            "user": self._config.user,
            "password": self._config.password,
            "database": self._config.database,
            "autocommit": False,
            # UPDATE rowcount reports matched rows, so an update that writes identical values still counts.
            "client_flags": [ClientFlag.FOUND_ROWS],
        }

    def _open(self):
        try:
            conn = self._connector(**self._connect_kwargs())
        except mysql.connector.Error as exc:
            logger.error("Cannot connect to %s: %s", self._config.describe(), exc)
            raise StoreUnavailable(f"Database connection failed: {exc}") from exc
        logger.info("Connected to %s", self._config.describe())
        return conn

    def _borrow(self):
        try:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"hajj_guide_{abs(hash(self._config)) % 10**8}",
                    pool_size=self._config.pool_size,
                    **self._connect_kwargs(),
                )
                logger.info("Opened pool of %d connections to %s", self._config.pool_size, self._config.describe())
            return self._pool.get_connection()
        except mysql.connector.Error as exc:
            logger.error("Cannot borrow a connection to %s: %s", self._config.describe(), exc)
            raise StoreUnavailable(f"Database connection failed: {exc}") from exc

    def acquire(self):
        """Return a live connection.

        Shared mode: the shared connection, reopened if it was dropped. Callers must not close it.
        Pooled mode: a borrowed connection; closing it returns it to the pool.
        """
        with self._lock:
            if self.pooled:
                return self._borrow()

            if self._conn is not None and not self._is_alive(self._conn):
                logger.warning("Shared connection to %s was lost, reconnecting", self._config.describe())
                self._conn = None
            if self._conn is None:
                self._conn = self._open()
            return self._conn

    def release(self) -> None:
        """Close the shared connection and the pool's idle connections; the next acquire reopens."""
        with self._lock:
            conn, self._conn = self._conn, None
            pool, self._pool = self._pool, None

        if pool is not None:
            self._close_pool(pool)

        if conn is None:
            return
        try:
            conn.close()
            logger.info("Released connection to %s", self._config.describe())
        except mysql.connector.Error as exc:
            logger.warning("Error while closing connection to %s: %s", self._config.describe(), exc)

    def _close_pool(self, pool) -> None:
        try:
            closed = pool._remove_connections()
            logger.info("Closed %s pooled connection(s) to %s", closed, self._config.describe())
        except mysql.connector.Error as exc:
            logger.warning("Error while closing pool for %s: %s", self._config.describe(), exc)

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """Scope one unit of work to a connection."""
        if self.pooled:
            if not self._slots.acquire(timeout=self._pool_wait):
                raise StoreUnavailable(
                    f"No pooled connection to {self._config.describe()} became free within {self._pool_wait:g}s"
                )
            try:
                with self._lock:
                    conn = self._borrow()
                    pool = self._pool
                try:
                    yield conn
                finally:
                    conn.close()
                    if pool is not self._pool:
                        # Released while borrowed: the connection went back to a discarded pool.
                        self._close_pool(pool)
            finally:
                self._slots.release()
            return

        with self._lock:
            yield self.acquire()

    @staticmethod
    def _is_alive(conn) -> bool:
        try:
            return bool(conn.is_connected())
        except mysql.connector.Error:
            return False
