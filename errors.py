"""
Error taxonomy for the API and the Flask handlers that render it.

Domain code raises one of the ``AppError`` subclasses below; the handlers
registered by ``register_error_handlers`` turn them into JSON bodies of the
form ``{"error": "<message>"}`` with the matching status code. Anything else
that escapes a view is logged with its traceback and reported as a generic
500. Details are only exposed outside production.
"""

import logging
import traceback

from flask import jsonify
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from extensions import db

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(AppError):
    """Malformed, missing or out-of-range input."""

    status_code = 400


class AuthError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AppError):
    """Authenticated, but not allowed to perform the action."""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ConflictError(AppError):
    """Uniqueness violation. Some endpoints report it as 400."""

    status_code = 409


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is absent."""


def register_error_handlers(app) -> None:
    """Attach JSON error handlers to ``app``."""

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        db.session.rollback()
        logger.warning("Integrity violation: %s", err.orig)
        conflict = ConflictError("Resource already exists")
        return jsonify(conflict.to_dict()), conflict.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if err.code == 404:
            return jsonify(error="Route not found"), 404
        return jsonify(error=err.description), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        db.session.rollback()
        logger.exception("Unhandled error: %s", err)
        body = {"error": "Internal server error"}
        if app.config.get("APP_ENV") != "production":
            body["details"] = str(err)
            body["stack"] = traceback.format_exc()
        return jsonify(body), 500
