from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of error kinds every failure is normalized into."""

    BAD_INPUT = "BAD_INPUT"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    STORAGE_ERROR = "STORAGE_ERROR"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL = "INTERNAL"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_INPUT: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE_ERROR: 500,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.TOKEN_EXPIRED: 401,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL: 500,
}


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        v = (value or "").strip().lower()
        if v in {"prod", "production"}:
            return cls.PRODUCTION
        if v in {"test", "testing"}:
            return cls.TESTING
        return cls.DEVELOPMENT
