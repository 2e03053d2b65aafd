from __future__ import annotations

import importlib
import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .common.http import domain_error_response, error_response
from .common.logging_setup import configure_logging
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import SCHEMA_PATH, SEED_PATH, apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _bootstrap_database(settings: Any, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=SEED_PATH)
        ensure_demo_users(db_config)
        logger.info("Demo seed ready")


def _register_hooks(app: Flask) -> None:
    @app.before_request
    def log_request_info():
        g.request_started = time.perf_counter()
        logger.debug("[REQUEST] %s %s - client: %s", request.method, request.path, request.remote_addr)

    @app.after_request
    def finish_response(response):
        started = getattr(g, "request_started", None)
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        if response.status_code >= 400 or duration_ms > 500:
            logger.info(
                "[RESPONSE] %s %s - status: %s - %.0fms",
                request.method,
                request.path,
                response.status_code,
                duration_ms,
            )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return domain_error_response(e)

    @app.errorhandler(404)
    def not_found(_e):
        return error_response("Route not found", "NOT_FOUND", 404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return error_response("Method not allowed", "METHOD_NOT_ALLOWED", 405)

    @app.errorhandler(429)
    def rate_limited(_e):
        return error_response("Too many requests", "RATE_LIMITED", 429)

    @app.errorhandler(Exception)
    def unhandled(e: Exception):
        if isinstance(e, HTTPException):
            return error_response(e.description or e.name, e.name.upper().replace(" ", "_"), e.code or 500)
        logger.exception("Unhandled error: %s", e)
        return error_response("Internal server error", "INTERNAL_ERROR", 500)


def create_app(settings: Optional[Any] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    if settings is None:
        settings = importlib.import_module(get_settings_module())

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", ""))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    db_config = dict(getattr(settings, "DB_CONFIG"))
    logger.info(
        "Starting - db=%s@%s:%s/%s",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET", None) or app.secret_key,
        )
    app.extensions["classroom_attendance"] = container

    cors_origins = list(getattr(settings, "CORS_ORIGINS", []) or [])
    if cors_origins:
        CORS(app, resources={r"/api/*": {"origins": cors_origins}}, supports_credentials=True)
    else:
        logger.warning("CORS_ORIGINS is empty; cross-origin requests are not allowed")
    Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[getattr(settings, "RATE_LIMIT", "100 per 15 minutes")],
        storage_uri="memory://",
    )

    _register_hooks(app)
    _register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})

    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_analytics(app, container)

    return app
