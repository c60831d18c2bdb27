from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .common.passwords import PasswordHasher
from .core.constants import DEFAULT_BCRYPT_ROUNDS
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository

    user_service: UserService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def build_container(*, db_config: dict, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> Container:
    """Open the connection pool and wire repositories and services onto it."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).open()

    users_repo = MySQLUserRepository(conn)
    user_service = UserService(users_repo, PasswordHasher(bcrypt_rounds))

    return Container(
        conn=conn,
        users_repo=users_repo,
        user_service=user_service,
    )
