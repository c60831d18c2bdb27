from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DEFAULT_CONNECTION_TIMEOUT, DEFAULT_POOL_NAME, DEFAULT_POOL_SIZE, MAX_POOL_SIZE
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_name: str = DEFAULT_POOL_NAME
    pool_size: int = DEFAULT_POOL_SIZE
    connection_timeout: int = DEFAULT_CONNECTION_TIMEOUT

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        pool_size = int(db_config.get("pool_size", DEFAULT_POOL_SIZE))
        if not 1 <= pool_size <= MAX_POOL_SIZE:
            raise ValueError(f"pool_size must be between 1 and {MAX_POOL_SIZE}, got {pool_size}")
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_name=str(db_config.get("pool_name", DEFAULT_POOL_NAME)),
            pool_size=pool_size,
            connection_timeout=int(db_config.get("connection_timeout", DEFAULT_CONNECTION_TIMEOUT)),
        )


class DatabaseConnection:
    """Owns the bounded connection pool.

    The pool is created by open() at startup and released by close() at
    shutdown; repositories receive this object instead of reaching for a
    global. connect() hands out a pooled connection whose close() returns it
    to the pool. An exhausted pool fails immediately with PoolError.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> "DatabaseConnection":
        if self._pool is not None:
            return self

        cfg = self._config
        self._pool = pooling.MySQLConnectionPool(
            pool_name=cfg.pool_name,
            pool_size=cfg.pool_size,
            pool_reset_session=True,
            host=cfg.host,
            port=int(cfg.port),
            user=cfg.user,
            password=cfg.password,
            database=cfg.database,
            connection_timeout=cfg.connection_timeout,
        )
        logger.info(
            "Connection pool %s ready (size=%d) for %s@%s:%s/%s",
            cfg.pool_name,
            cfg.pool_size,
            cfg.user,
            cfg.host,
            cfg.port,
            cfg.database,
        )
        return self

    def close(self) -> None:
        if self._pool is None:
            return
        # Closes idle connections; connections still checked out are closed when released.
        removed = self._pool._remove_connections()
        self._pool = None
        logger.info("Connection pool %s closed (%d idle connections released)", self._config.pool_name, removed)

    def connect(self) -> Any:
        if self._pool is None:
            raise StorageError("Connection pool is not initialized")
        return self._pool.get_connection()

    def ping(self) -> Any:
        """Round-trip to the store; returns the server time."""
        conn = self.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT NOW()")
                row = cur.fetchone()
                return row[0] if row else None
            finally:
                cur.close()
        except mysql.connector.Error:
            logger.error(
                "Error testing connection to the database",
                extra={"db_host": self._config.host, "db_port": self._config.port, "db_name": self._config.database},
            )
            raise
        finally:
            conn.close()
