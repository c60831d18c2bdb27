from __future__ import annotations

from typing import Any, Optional

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass is pinned to one ErrorKind; operational errors are expected
    outcomes whose message is safe to show to the client.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    is_operational: bool = True

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class BadInputError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    kind = ErrorKind.BAD_INPUT


class ConflictError(DomainError):
    """Raised when a username or email is already taken."""

    kind = ErrorKind.CONFLICT

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND


class AuthenticationError(DomainError):
    """Raised when a credential token is invalid."""

    kind = ErrorKind.UNAUTHENTICATED


class TokenExpiredError(AuthenticationError):
    kind = ErrorKind.TOKEN_EXPIRED


class StorageError(DomainError):
    """Raised by repositories for any failure reported by the store.

    Carries the driver's errno/sqlstate and raw message for server-side logs;
    the raw message is never rendered to clients outside development.
    """

    kind = ErrorKind.STORAGE_ERROR
    is_operational = False

    def __init__(
        self,
        message: str,
        *,
        errno: Optional[int] = None,
        sqlstate: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message, details={"errno": errno, "sqlstate": sqlstate, "detail": detail})
        self.errno = errno
        self.sqlstate = sqlstate
        self.detail = detail


class StorageConflict(StorageError):
    """A unique constraint was violated.

    column/value are filled in when the driver message names the offending key.
    """

    def __init__(
        self,
        message: str,
        *,
        column: Optional[str] = None,
        value: Optional[str] = None,
        errno: Optional[int] = None,
        sqlstate: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message, errno=errno, sqlstate=sqlstate, detail=detail)
        self.column = column
        self.value = value
        self.details.update({"column": column, "value": value})
