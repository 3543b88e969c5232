from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.logging import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def _error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return _error(str(e), status)
        logger.exception("Unhandled domain error")
        return _error("Internal server error", 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return _error("Internal server error", 500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        container = build_container(settings)
        atexit.register(container.dispatcher.shutdown, wait=False, cancel_pending=True)
        db = container.conn.config
        logger.info("settings=%s db=%s@%s:%s/%s", settings_module, db.user, db.host, db.port, db.database)
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)

    app.extensions["timeconnect"] = container

    register_auth(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    create_app().run()
