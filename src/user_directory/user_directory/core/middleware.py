"""Cross-cutting HTTP policies: CORS and per-client rate limiting."""

from __future__ import annotations

from typing import Sequence, Union

from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.errors import RateLimitExceeded
from flask_limiter.util import get_remote_address

from .error_handlers import handle_exception


def init_cors(app: Flask, origins: Union[str, Sequence[str]] = "*") -> None:
    CORS(app, origins=origins)


def init_rate_limiting(app: Flask, *, default_limit: str, enabled: bool = True) -> Limiter:
    """Apply default_limit (e.g. "100 per 15 minutes") to every route, keyed by client address.

    Counters live in process memory, one store per app.
    """
    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=[default_limit],
        storage_uri="memory://",
        headers_enabled=True,
        enabled=enabled,
    )
    # Breaches render through the same JSON error boundary as everything else.
    app.register_error_handler(RateLimitExceeded, handle_exception)
    return limiter
