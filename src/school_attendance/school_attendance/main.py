from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .academic.controller import register as register_academic
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SCHOOL_CITY, DEFAULT_SCHOOL_NAME, DEFAULT_SYNC_POLL_SECONDS
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    StoreNotConfiguredError,
    StoreReadError,
    StoreWriteError,
    ValidationError,
)
from .database.bootstrap import apply_schema, list_tables
from .database.connection import is_store_configured
from .notifications.controller import register as register_notifications
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .subjects.controller import register as register_subjects
from .teachers.controller import register as register_teachers

logger = logging.getLogger(__name__)


def _error_status(exc: DomainError) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, (StoreNotConfiguredError, StoreReadError, StoreWriteError)):
        return 503
    return 400


def add_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = _error_status(exc)
        if status == 503:
            logger.warning("Store unavailable: %s", exc)
        return jsonify({"success": False, "message": str(exc), "retryable": bool(exc.retryable)}), status


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        if is_store_configured(db_config):
            if app.config["DEBUG"]:
                logger.info(
                    "settings=%s db=%s@%s:%s/%s",
                    settings_module,
                    db_config.get("user"),
                    db_config.get("host"),
                    db_config.get("port", 3306),
                    db_config.get("database"),
                )
            if bool(getattr(settings, "AUTO_INIT_DB", False)):
                schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
                apply_schema(db_config, schema_path=schema_path)
                logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        else:
            logger.warning("Database belum dikonfigurasi: aplikasi berjalan offline, data tidak akan tersimpan.")

        container = build_container(
            db_config=db_config,
            school_name=getattr(settings, "SCHOOL_NAME", DEFAULT_SCHOOL_NAME),
            school_city=getattr(settings, "SCHOOL_CITY", DEFAULT_SCHOOL_CITY),
            poll_seconds=float(getattr(settings, "SYNC_POLL_SECONDS", DEFAULT_SYNC_POLL_SECONDS)),
        )

    container.replica.start()
    app.extensions["school_attendance"] = container

    @app.before_request
    def refresh_replica():
        container.replica.poll_if_due()

    @app.route("/api/status", methods=["GET"], endpoint="status")
    def status():
        connected = container.state.connected
        active = container.state.active_year()
        return jsonify(
            {
                "connected": connected,
                "message": "Terhubung ke database" if connected else "Tidak terhubung. Data tidak akan tersimpan.",
                "active_year": active.name if active else None,
                "school_name": container.school_name,
            }
        )

    add_error_handlers(app)

    register_teachers(app, container)
    register_students(app, container)
    register_academic(app, container)
    register_subjects(app, container)
    register_attendance(app, container)
    register_notifications(app, container)
    register_reports(app, container)

    return app
