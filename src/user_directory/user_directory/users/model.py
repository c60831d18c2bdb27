from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional, Sequence


class _Unset:
    """Marks an update field the caller did not supply (distinct from None)."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class User:
    """Domain entity: one row of the users table.

    password_hash is only populated by the lookup-by-username path; every
    other read leaves it as None.
    """

    user_id: int
    username: str
    employee_id: Optional[int] = None
    email: Optional[str] = None
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    password_hash: Optional[str] = field(default=None, repr=False)

    def without_credentials(self) -> "User":
        if self.password_hash is None:
            return self
        return replace(self, password_hash=None)

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "employeeId": self.employee_id,
            "username": self.username,
            "email": self.email,
            "isActive": self.is_active,
            "lastLoginAt": _iso(self.last_login_at),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass(frozen=True)
class FieldAssignment:
    column: str
    value: Any


@dataclass(frozen=True)
class UserUpdate:
    """Partial update: only fields left different from UNSET are written."""

    employee_id: Any = UNSET
    email: Any = UNSET
    is_active: Any = UNSET
    last_login_at: Any = UNSET

    def assignments(self) -> list[FieldAssignment]:
        out: list[FieldAssignment] = []
        if self.employee_id is not UNSET:
            out.append(FieldAssignment("employee_id", self.employee_id))
        if self.email is not UNSET:
            out.append(FieldAssignment("email", self.email))
        if self.is_active is not UNSET:
            out.append(FieldAssignment("is_active", bool(self.is_active)))
        if self.last_login_at is not UNSET:
            out.append(FieldAssignment("last_login_at", self.last_login_at))
        return out

    def is_empty(self) -> bool:
        return not self.assignments()


@dataclass(frozen=True)
class Pagination:
    current_page: int
    limit: int
    total_pages: int
    total_users: int

    @classmethod
    def from_window(cls, *, limit: int, offset: int, total: int) -> "Pagination":
        return cls(
            current_page=offset // limit + 1,
            limit=limit,
            total_pages=-(-total // limit),
            total_users=total,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "currentPage": self.current_page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "totalUsers": self.total_users,
        }


@dataclass(frozen=True)
class UserPage:
    users: Sequence[User]
    pagination: Pagination
