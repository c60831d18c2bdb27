from __future__ import annotations

import importlib
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request

from config import get_settings_module

from .common.validators import parse_byte_size
from .container import Container, build_container
from .core.constants import API_PREFIX, DEFAULT_BCRYPT_ROUNDS, DEFAULT_BODY_LIMIT, DEFAULT_RATE_LIMIT
from .core.enums import Environment
from .core.error_handlers import register_error_handlers
from .core.logging import setup_logging
from .core.middleware import init_cors, init_rate_limiting
from .database.bootstrap import apply_schema, list_tables
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

EXTENSION_KEY = "user_directory"


def _register_request_logging(app: Flask) -> None:
    access_log = logging.getLogger("user_directory.access")

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        access_log.info(
            "%s %s %s %s %.1fms", request.remote_addr, request.method, request.full_path.rstrip("?"), response.status_code, elapsed_ms
        )
        return response


def _register_health(app: Flask) -> None:
    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "UP", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.route(f"{API_PREFIX}/status", methods=["GET"], endpoint="api_status")
    def api_status():
        return jsonify({"status": "OK", "message": "API v1 is running"})


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    Tests pass a prebuilt container; otherwise the connection pool is opened
    here and released by Container.close() (see app.py).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    environment = Environment.parse(getattr(settings, "ENVIRONMENT", "development"))
    setup_logging(environment, getattr(settings, "LOG_LEVEL", None))

    app.config["ENVIRONMENT"] = environment.value
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = parse_byte_size(getattr(settings, "BODY_LIMIT", DEFAULT_BODY_LIMIT))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            bcrypt_rounds=int(getattr(settings, "BCRYPT_SALT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)),
        )
        try:
            logger.info("Database connection successful: %s", container.conn.ping())
        except Exception:
            container.close()
            raise

    app.extensions[EXTENSION_KEY] = container

    register_error_handlers(app)
    init_cors(app, getattr(settings, "CORS_ORIGINS", "*"))
    init_rate_limiting(
        app,
        default_limit=getattr(settings, "RATE_LIMIT", DEFAULT_RATE_LIMIT),
        enabled=bool(getattr(settings, "RATE_LIMIT_ENABLED", True)),
    )
    _register_request_logging(app)
    _register_health(app)
    register_users(app, container)

    return app
