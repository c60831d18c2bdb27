from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StorageConflict, StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# "Duplicate entry 'alice' for key 'users.uq_users_username'" (MySQL 8 prefixes the table name).
_DUPLICATE_ENTRY_RE = re.compile(r"Duplicate entry '(?P<value>.*)' for key '(?:[^'.]+\.)?(?P<key>[^']+)'")
_NAMED_UNIQUE_KEY_RE = re.compile(r"^(?:uq|uniq|ux)_[a-z0-9]+_(?P<column>.+)$")


def parse_duplicate_entry(message: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Return (column, value) named by a duplicate-entry message, or (None, None)."""

    match = _DUPLICATE_ENTRY_RE.search(message or "")
    if not match:
        return None, None
    key = match.group("key")
    named = _NAMED_UNIQUE_KEY_RE.match(key)
    column = named.group("column") if named else key
    return column, match.group("value")


def translate_error(exc: mysql.connector.Error) -> StorageError:
    """Wrap a driver error into StorageError, or StorageConflict for unique violations."""

    detail = getattr(exc, "msg", None) or str(exc)
    errno = getattr(exc, "errno", None)
    sqlstate = getattr(exc, "sqlstate", None)
    if errno == errorcode.ER_DUP_ENTRY:
        column, value = parse_duplicate_entry(detail)
        return StorageConflict(
            "Unique constraint violated",
            column=column,
            value=value,
            errno=errno,
            sqlstate=sqlstate,
            detail=detail,
        )
    return StorageError("Database operation failed", errno=errno, sqlstate=sqlstate, detail=detail)


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as exc:
        logger.warning("Rollback failed: %s", exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise translate_error(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback_quietly(conn)
        raise translate_error(exc) from exc
    except Exception:
        _rollback_quietly(conn)
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
