"""Flask application factory."""

from __future__ import annotations

import logging

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from api.auth import AdminTokens
from api.responses import fail
from api.routes import api
from config import ClubConfig
from domain.engine import RatingEngine
from domain.errors import ClubError, ConflictError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[ClubError], int], ...] = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StorageError, 500),
)


def status_for(error: ClubError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


def create_app(rating_engine: RatingEngine, config: ClubConfig) -> Flask:
    """Build the app around an already opened engine; the caller owns its lifecycle."""
    app = Flask(__name__)
    app.config["ENVIRONMENT"] = config.server.environment
    app.json.sort_keys = False
    app.extensions["rating_engine"] = rating_engine
    app.extensions["admin_tokens"] = AdminTokens(
        secret_key=config.auth.secret_key,
        admin_password=config.auth.admin_password,
        max_age_seconds=config.auth.token_max_age_seconds,
    )
    CORS(app)
    app.register_blueprint(api)
    _register_error_handlers(app, development=config.server.is_development)
    return app


def _register_error_handlers(app: Flask, *, development: bool) -> None:
    @app.errorhandler(ClubError)
    def handle_club_error(error: ClubError):
        status = status_for(error)
        if status >= 500:
            cause = error.__cause__
            details = str(cause) if development and cause is not None else None
            return fail(error.message, status, details=details)
        logger.warning("Rejected request: %s", error.message)
        return fail(error.message, status)

    @app.errorhandler(404)
    def handle_not_found(_error: HTTPException):
        return fail("Endpoint not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(_error: HTTPException):
        return fail("Method not allowed", 405)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return fail(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("Unhandled error")
        return fail("Internal server error", 500, details=str(error) if development else None)
