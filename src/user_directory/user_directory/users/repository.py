from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User, UserUpdate


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete
    database. Not-found is signalled with None; store failures raise
    StorageError (StorageConflict for unique violations). Only
    find_by_username returns the password hash.
    """

    def create(
        self,
        *,
        username: str,
        password_hash: str,
        email: Optional[str],
        employee_id: Optional[int],
        is_active: bool,
    ) -> User:
        raise NotImplementedError

    def find_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def find_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def find_by_email(self, email: Optional[str]) -> Optional[User]:
        raise NotImplementedError

    def list_page(self, *, limit: int, offset: int) -> tuple[Sequence[User], int]:
        """Return one page ordered newest first, plus the total row count."""

        raise NotImplementedError

    def update(self, user_id: int, changes: UserUpdate) -> Optional[User]:
        raise NotImplementedError

    def soft_delete(self, user_id: int) -> Optional[User]:
        raise NotImplementedError
