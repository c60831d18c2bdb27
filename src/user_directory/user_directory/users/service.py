from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_utc
from ..common.passwords import PasswordHasher
from ..common.validators import optional_int, optional_str, require_bool, require_non_empty
from ..core.exceptions import BadInputError, ConflictError, NotFoundError, StorageConflict
from .model import Pagination, User, UserPage, UserUpdate
from .repository import UserRepository

logger = logging.getLogger(__name__)

# Attributes a caller may change through update_user. username, password and
# the hash have dedicated flows and are dropped here whatever the caller sends.
UPDATABLE_FIELDS = ("email", "is_active", "employee_id")


class UserService:
    """Use case: manage the user directory.

    Uniqueness pre-checks are advisory; the store's unique indexes decide, and
    a lost race is reported as ConflictError like any other duplicate.
    """

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self._users = users
        self._hasher = hasher

    def create_user(
        self,
        *,
        username: Any,
        password: Any,
        email: Any = None,
        employee_id: Any = None,
        is_active: Any = True,
    ) -> User:
        username = require_non_empty(username, "Username and password are required.")
        if not isinstance(password, str) or not password:
            raise BadInputError("Username and password are required.")
        email = optional_str(email, "email")
        employee_id = optional_int(employee_id, "employeeId")
        is_active = True if is_active is None else require_bool(is_active, "isActive")

        if self._users.find_by_username(username):
            raise ConflictError(f"Username '{username}' already exists.", field="username")
        if email and self._users.find_by_email(email):
            raise ConflictError(f"Email '{email}' already exists.", field="email")

        password_hash = self._hasher.hash(password)
        logger.debug("Password hashed for user: %s", username)

        try:
            user = self._users.create(
                username=username,
                password_hash=password_hash,
                email=email,
                employee_id=employee_id,
                is_active=is_active,
            )
        except StorageConflict as exc:
            logger.warning("Unique constraint violation during user creation: %s", exc.detail)
            if exc.column == "username":
                raise ConflictError(f"Username '{username}' already exists.", field="username") from exc
            if exc.column == "email":
                raise ConflictError(f"Email '{email}' already exists.", field="email") from exc
            raise ConflictError("User creation failed due to duplicate information.") from exc

        return user.without_credentials()

    def get_user_by_id(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found.")
        return user.without_credentials()

    def get_user_by_username(self, username: str) -> User:
        """Full record including password_hash, for credential verification only."""
        user = self._users.find_by_username(username)
        if not user:
            raise NotFoundError(f"User with username '{username}' not found.")
        return user

    def list_users(self, *, limit: int, offset: int) -> UserPage:
        if int(limit) < 1:
            raise BadInputError("limit must be a positive integer.")
        if int(offset) < 0:
            raise BadInputError("offset must not be negative.")

        users, total = self._users.list_page(limit=int(limit), offset=int(offset))
        return UserPage(
            users=[u.without_credentials() for u in users],
            pagination=Pagination.from_window(limit=int(limit), offset=int(offset), total=total),
        )

    def _build_update(self, fields: Mapping[str, Any]) -> UserUpdate:
        allowed = {k: fields[k] for k in UPDATABLE_FIELDS if k in fields}
        kwargs: dict[str, Any] = {}
        if "email" in allowed:
            kwargs["email"] = optional_str(allowed["email"], "email")
        if "is_active" in allowed:
            kwargs["is_active"] = require_bool(allowed["is_active"], "isActive")
        if "employee_id" in allowed:
            kwargs["employee_id"] = optional_int(allowed["employee_id"], "employeeId")
        return UserUpdate(**kwargs)

    def update_user(self, user_id: int, fields: Mapping[str, Any]) -> User:
        changes = self._build_update(fields)
        if changes.is_empty():
            logger.debug("No valid fields to update for user ID %s", user_id)
            return self.get_user_by_id(user_id)

        email: Optional[str] = changes.email or None
        if email:
            existing = self._users.find_by_email(email)
            if existing and existing.user_id != user_id:
                raise ConflictError(f"Email '{email}' is already associated with another user.", field="email")

        try:
            user = self._users.update(user_id, changes)
        except StorageConflict as exc:
            logger.warning("Unique constraint violation during update of user %s: %s", user_id, exc.detail)
            if exc.column == "email":
                raise ConflictError(f"Email '{email}' already exists.", field="email") from exc
            raise ConflictError("User update failed due to duplicate information.") from exc

        if not user:
            raise NotFoundError(f"User with ID {user_id} not found for update.")
        return user.without_credentials()

    def delete_user(self, user_id: int) -> User:
        user = self._users.soft_delete(user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found for deletion.")
        return user.without_credentials()

    def record_login(self, user_id: int) -> User:
        """Stamp last_login_at; called by the login flow after a successful check."""
        user = self._users.update(user_id, UserUpdate(last_login_at=now_utc()))
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found.")
        return user.without_credentials()
