from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User, UserUpdate
from .repository import UserRepository

logger = logging.getLogger(__name__)

_PUBLIC_COLUMNS = "user_id, employee_id, username, email, is_active, last_login_at, created_at, updated_at"
_ALL_COLUMNS = _PUBLIC_COLUMNS + ", password_hash"


def _to_user(row: dict[str, Any]) -> User:
    employee_id = row.get("employee_id")
    return User(
        user_id=int(row["user_id"]),
        employee_id=int(employee_id) if employee_id is not None else None,
        username=row["username"],
        email=row.get("email"),
        is_active=bool(row.get("is_active", True)),
        last_login_at=row.get("last_login_at"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        password_hash=row.get("password_hash"),
    )


def build_update_statement(user_id: int, changes: UserUpdate) -> Optional[tuple[str, tuple]]:
    """Build the UPDATE for exactly the supplied fields.

    Returns None when nothing was supplied. updated_at is always refreshed.
    """

    assignments = changes.assignments()
    if not assignments:
        return None
    set_clause = ", ".join(f"{a.column}=%s" for a in assignments)
    sql = f"UPDATE users SET {set_clause}, updated_at=CURRENT_TIMESTAMP(6) WHERE user_id=%s"
    params = tuple(a.value for a in assignments) + (user_id,)
    return sql, params


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, where: str, value: Any, *, columns: str = _PUBLIC_COLUMNS) -> Optional[User]:
        cur.execute(f"SELECT {columns} FROM users WHERE {where}=%s", (value,))
        row = fetchone(cur)
        return _to_user(row) if row else None

    def create(
        self,
        *,
        username: str,
        password_hash: str,
        email: Optional[str],
        employee_id: Optional[int],
        is_active: bool,
    ) -> User:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(employee_id, username, password_hash, email, is_active)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, username, password_hash, email, bool(is_active)),
            )
            user_id = int(cur.lastrowid)
            user = self._select_one(cur, "user_id", user_id)
        logger.debug("User created with ID: %s", user_id)
        return user

    def find_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            user = self._select_one(cur, "user_id", user_id)
        logger.debug("User %s by ID: %s", "found" if user else "not found", user_id)
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            user = self._select_one(cur, "username", username, columns=_ALL_COLUMNS)
        logger.debug("User %s by username: %s", "found" if user else "not found", username)
        return user

    def find_by_email(self, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            user = self._select_one(cur, "email", email)
        logger.debug("User %s by email: %s", "found" if user else "not found", email)
        return user

    def list_page(self, *, limit: int, offset: int) -> tuple[Sequence[User], int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM users")
            count_row = fetchone(cur)
            total = int(count_row["total"]) if count_row else 0

            cur.execute(
                f"""
                SELECT {_PUBLIC_COLUMNS}
                FROM users
                ORDER BY created_at DESC, user_id DESC
                LIMIT %s OFFSET %s
                """,
                (int(limit), int(offset)),
            )
            users = [_to_user(r) for r in fetchall(cur)]
        logger.debug("Found %d users (limit: %s, offset: %s). Total users: %d", len(users), limit, offset, total)
        return users, total

    def update(self, user_id: int, changes: UserUpdate) -> Optional[User]:
        statement = build_update_statement(user_id, changes)
        if statement is None:
            logger.debug("No fields provided for update of user %s", user_id)
            return self.find_by_id(user_id)

        sql, params = statement
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            user = self._select_one(cur, "user_id", user_id)
        if user is None:
            logger.warning("User not found for update with ID: %s", user_id)
        else:
            logger.debug("User updated with ID: %s", user_id)
        return user

    def soft_delete(self, user_id: int) -> Optional[User]:
        return self.update(user_id, UserUpdate(is_active=False))
