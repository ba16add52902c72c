from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DeliveryError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_student, list_tables
from .database.connection import DBConfig
from .timetable.controller import register as register_timetable
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (DeliveryError, 502),
)


def status_for(error: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 500


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            logger.error("Request failed: %s", e, exc_info=True)
        return jsonify({"message": str(e)}), status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.error("Unhandled error", exc_info=True)
        return jsonify({"message": "Internal server error"}), 500


def _prepare_database(settings, db_config: dict, debug: bool) -> None:
    database_dir = Path(__file__).resolve().parents[3] / "database"

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=database_dir / "schema.sql")
        if debug:
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=database_dir / "seed.sql")
        ensure_demo_student(db_config)
        logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass ``container`` to run on pre-wired (e.g. in-memory) services."""

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if app.config["DEBUG"]:
            logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())
        _prepare_database(settings, db_config, app.config["DEBUG"])
        container = build_container(settings=settings)

    app.extensions["attendease.container"] = container

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def health():
        return jsonify({"status": "OK", "message": "AttendEase API is running"})

    _register_error_handlers(app)

    register_auth(app, container)
    register_users(app, container)
    register_attendance(app, container)
    register_timetable(app, container)
    register_admin(app, container)

    return app
