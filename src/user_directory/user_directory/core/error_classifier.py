"""Map low-level failures onto the ErrorKind taxonomy.

Storage errors are classified by MySQL errno, credential-token errors by
their itsdangerous type, framework errors by their HTTP status. Client-facing
messages only include storage detail (column names, values, driver text) when
verbose is set; the full detail is always kept in ClassifiedError.detail for
server-side logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import mysql.connector
from itsdangerous import BadData, SignatureExpired
from mysql.connector import errorcode
from werkzeug.exceptions import HTTPException

from ..database.mysql_base import parse_duplicate_entry, translate_error
from .constants import GENERIC_SERVER_ERROR_MESSAGE, RATE_LIMIT_MESSAGE
from .enums import ErrorKind
from .exceptions import DomainError, StorageConflict, StorageError

_FOREIGN_KEY_ERRNOS = frozenset({errorcode.ER_NO_REFERENCED_ROW_2, errorcode.ER_ROW_IS_REFERENCED_2})
_INVALID_DATA_ERRNOS = frozenset(
    {
        errorcode.ER_BAD_NULL_ERROR,
        errorcode.ER_WARN_DATA_OUT_OF_RANGE,
        errorcode.ER_TRUNCATED_WRONG_VALUE,
        errorcode.ER_TRUNCATED_WRONG_VALUE_FOR_FIELD,
        errorcode.ER_DATA_TOO_LONG,
        errorcode.ER_CHECK_CONSTRAINT_VIOLATED,
    }
)


@dataclass(frozen=True)
class ClassifiedError:
    kind: ErrorKind
    status_code: int
    message: str
    is_operational: bool
    detail: dict[str, Any] = field(default_factory=dict)

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"


def _classify_storage(exc: StorageError, verbose: bool) -> ClassifiedError:
    detail = {"errno": exc.errno, "sqlstate": exc.sqlstate, "detail": exc.detail}

    if isinstance(exc, StorageConflict) or exc.errno == errorcode.ER_DUP_ENTRY:
        column = getattr(exc, "column", None)
        value = getattr(exc, "value", None)
        if column is None:
            column, value = parse_duplicate_entry(exc.detail)
        message = "Duplicate data. Please use another value!"
        if verbose and column:
            message = f'Duplicate {column} value: "{value}". Please use another value!'
        return ClassifiedError(ErrorKind.CONFLICT, 409, message, True, detail)

    if exc.errno in _FOREIGN_KEY_ERRNOS:
        message = "Invalid reference: a related record was not found."
        if verbose and exc.detail:
            message = f"Invalid reference: {exc.detail}"
        return ClassifiedError(ErrorKind.BAD_INPUT, 400, message, True, detail)

    if exc.errno in _INVALID_DATA_ERRNOS:
        message = "Invalid input data."
        if verbose and exc.detail:
            message = f"Database validation failed: {exc.detail}"
        return ClassifiedError(ErrorKind.BAD_INPUT, 400, message, True, detail)

    message = GENERIC_SERVER_ERROR_MESSAGE
    if verbose:
        message = f"{exc.message}: {exc.detail}" if exc.detail else exc.message
    return ClassifiedError(ErrorKind.STORAGE_ERROR, 500, message, False, detail)


def _classify_http(exc: HTTPException, path: Optional[str], method: Optional[str]) -> ClassifiedError:
    code = exc.code or 500
    if code == 404:
        if path:
            return ClassifiedError(ErrorKind.NOT_FOUND, 404, f"Can't find {method} {path} on this server!", True)
        return ClassifiedError(ErrorKind.NOT_FOUND, 404, exc.description or "Not Found", True)
    if code == 401:
        return ClassifiedError(ErrorKind.UNAUTHENTICATED, 401, exc.description or "Unauthorized", True)
    if code == 429:
        return ClassifiedError(ErrorKind.RATE_LIMITED, 429, RATE_LIMIT_MESSAGE, True, {"limit": exc.description})
    if 400 <= code < 500:
        return ClassifiedError(ErrorKind.BAD_INPUT, code, exc.description or exc.name, True)
    return ClassifiedError(ErrorKind.INTERNAL, code, GENERIC_SERVER_ERROR_MESSAGE, False)


def classify(
    exc: BaseException,
    *,
    verbose: bool = False,
    path: Optional[str] = None,
    method: Optional[str] = None,
) -> ClassifiedError:
    if isinstance(exc, mysql.connector.Error):
        exc = translate_error(exc)

    if isinstance(exc, StorageError):
        return _classify_storage(exc, verbose)

    if isinstance(exc, DomainError):
        return ClassifiedError(exc.kind, exc.status_code, exc.message, exc.is_operational, dict(exc.details))

    # SignatureExpired is a BadData subclass, so it has to be checked first.
    if isinstance(exc, SignatureExpired):
        return ClassifiedError(
            ErrorKind.TOKEN_EXPIRED, 401, "Your token has expired! Please log in again.", True
        )
    if isinstance(exc, BadData):
        return ClassifiedError(ErrorKind.UNAUTHENTICATED, 401, "Invalid token. Please log in again!", True)

    if isinstance(exc, HTTPException):
        return _classify_http(exc, path, method)

    message = f"{type(exc).__name__}: {exc}" if verbose else GENERIC_SERVER_ERROR_MESSAGE
    return ClassifiedError(ErrorKind.INTERNAL, 500, message, False)
