"""HTTP error boundary.

register_error_handlers(app) routes every exception escaping a view through
the classifier, logs it, and renders the JSON error body. Development
responses carry the error kind, detail and stack trace; other environments
only get the client-safe message.
"""

from __future__ import annotations

import logging
import traceback

from flask import Flask, current_app, jsonify, request

from .enums import Environment
from .error_classifier import ClassifiedError, classify

logger = logging.getLogger(__name__)


def _is_development() -> bool:
    return current_app.config.get("ENVIRONMENT") == Environment.DEVELOPMENT.value


def _log(exc: BaseException, classified: ClassifiedError) -> None:
    context = {
        "path": request.path,
        "method": request.method,
        "status_code": classified.status_code,
        "kind": classified.kind.value,
    }
    if classified.is_operational:
        logger.warning(
            "Operational error %s %s -> %s %s: %s (%s)",
            request.method,
            request.path,
            classified.status_code,
            classified.kind.value,
            exc,
            classified.detail,
            extra=context,
        )
    else:
        logger.error(
            "Non-operational error %s %s: %s (%s)",
            request.method,
            request.path,
            exc,
            classified.detail,
            exc_info=exc,
            extra=context,
        )


def handle_exception(exc: BaseException):
    verbose = _is_development()
    classified = classify(exc, verbose=verbose, path=request.path, method=request.method)
    _log(exc, classified)

    body = {"status": classified.status, "message": classified.message}
    if verbose:
        body["error"] = {
            "kind": classified.kind.value,
            "statusCode": classified.status_code,
            "detail": classified.detail,
        }
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return jsonify(body), classified.status_code


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(Exception, handle_exception)
