from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Optional

import pytest

from src.user_directory.user_directory.common.passwords import PasswordHasher
from src.user_directory.user_directory.container import Container
from src.user_directory.user_directory.core.exceptions import StorageConflict
from src.user_directory.user_directory.main import create_app
from src.user_directory.user_directory.users.model import User, UserUpdate
from src.user_directory.user_directory.users.service import UserService

BASE_TIME = datetime(2025, 1, 1, 8, 0, 0)


class InMemoryUsers:
    """UserRepository fake that enforces the same unique keys as the schema.

    hide_from_lookups makes find_by_username/find_by_email miss existing rows,
    which reproduces a create racing past the service's pre-check.
    return_hashes makes every read return the stored hash, like a careless store.
    """

    def __init__(self):
        self._rows: dict[int, User] = {}
        self._next_id = 1
        self.hide_from_lookups = False
        self.return_hashes = False
        self.calls: list[str] = []

    def _public(self, row: User) -> User:
        return row if self.return_hashes else row.without_credentials()

    def _check_unique(self, *, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None) -> None:
        for row in self._rows.values():
            if row.user_id == exclude_id:
                continue
            if username is not None and row.username == username:
                raise StorageConflict("Unique constraint violated", column="username", value=username, errno=1062)
            if email and row.email == email:
                raise StorageConflict("Unique constraint violated", column="email", value=email, errno=1062)

    def create(self, *, username, password_hash, email, employee_id, is_active) -> User:
        self.calls.append("create")
        self._check_unique(username=username, email=email)
        user_id = self._next_id
        self._next_id += 1
        now = BASE_TIME + timedelta(minutes=user_id)
        self._rows[user_id] = User(
            user_id=user_id,
            username=username,
            employee_id=employee_id,
            email=email,
            is_active=is_active,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        return self._public(self._rows[user_id])

    def find_by_id(self, user_id: int) -> Optional[User]:
        self.calls.append("find_by_id")
        row = self._rows.get(user_id)
        return self._public(row) if row else None

    def find_by_username(self, username: str) -> Optional[User]:
        self.calls.append("find_by_username")
        if self.hide_from_lookups:
            return None
        return next((r for r in self._rows.values() if r.username == username), None)

    def find_by_email(self, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        self.calls.append("find_by_email")
        if self.hide_from_lookups:
            return None
        row = next((r for r in self._rows.values() if r.email == email), None)
        return self._public(row) if row else None

    def list_page(self, *, limit: int, offset: int):
        self.calls.append("list_page")
        rows = sorted(self._rows.values(), key=lambda r: (r.created_at, r.user_id), reverse=True)
        return [self._public(r) for r in rows[offset : offset + limit]], len(rows)

    def update(self, user_id: int, changes: UserUpdate) -> Optional[User]:
        assignments = changes.assignments()
        if not assignments:
            return self.find_by_id(user_id)
        self.calls.append("update")
        row = self._rows.get(user_id)
        if row is None:
            return None
        values = {a.column: a.value for a in assignments}
        self._check_unique(username=None, email=values.get("email"), exclude_id=user_id)
        row = replace(row, updated_at=(row.updated_at or BASE_TIME) + timedelta(seconds=1), **values)
        self._rows[user_id] = row
        return self._public(row)

    def soft_delete(self, user_id: int) -> Optional[User]:
        return self.update(user_id, UserUpdate(is_active=False))

    def stored(self, user_id: int) -> User:
        return self._rows[user_id]


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(4)


@pytest.fixture
def user_service(users_repo, hasher) -> UserService:
    return UserService(users_repo, hasher)


@pytest.fixture
def container(users_repo, user_service) -> Container:
    return Container(conn=None, users_repo=users_repo, user_service=user_service)


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def dev_client(container):
    return create_app(container=container, settings_module="config.development").test_client()


class FakeCursor:
    def __init__(self, results: list[Any], *, fail_on: Optional[dict[str, Exception]] = None, lastrowid: int = 1):
        self._results = list(results)
        self._fail_on = fail_on or {}
        self.executed: list[tuple[str, tuple]] = []
        self.lastrowid = lastrowid
        self.closed = False

    def execute(self, sql: str, params: tuple = ()) -> None:
        self.executed.append((" ".join(sql.split()), tuple(params)))
        for fragment, exc in self._fail_on.items():
            if fragment in sql:
                raise exc

    def fetchone(self):
        return self._results.pop(0) if self._results else None

    def fetchall(self):
        return self._results.pop(0) if self._results else []

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary: bool = False) -> FakeCursor:
        return self._cursor

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True


class FakeConnFactory:
    """Hands out the same scripted connection; connect_error simulates pool failures."""

    def __init__(self, results: Optional[list[Any]] = None, *, connect_error: Optional[Exception] = None, **cursor_kwargs):
        self.cursor = FakeCursor(results or [], **cursor_kwargs)
        self.conn = FakeConnection(self.cursor)
        self._connect_error = connect_error
        self.connects = 0

    def connect(self) -> FakeConnection:
        self.connects += 1
        if self._connect_error is not None:
            raise self._connect_error
        return self.conn

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.cursor.executed]


@pytest.fixture
def fake_db():
    """Factory for scripted connection factories: fake_db(results, connect_error=..., fail_on=...)."""
    return FakeConnFactory
