"""JSON error responses.

Every failure leaves the API as ``{"error": "<message>"}``. Domain errors
map to fixed status codes; anything unexpected is logged and reported as
a generic 500.
"""

from __future__ import annotations

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DirectoryError,
    NotFoundError,
    ReferentialError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (ReferentialError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (DirectoryError, 502),
)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def register_error_handlers(app: Flask) -> None:
    for exc_type, status in STATUS_BY_ERROR:

        def handle(e, status=status):
            return _error(str(e), status)

        app.register_error_handler(exc_type, handle)

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def internal_error(e: Exception):
        current_app.logger.exception("Unhandled error: %s", e)
        return _error("Internal server error", 500)
