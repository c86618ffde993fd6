from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.constants import DEFAULT_LIST_LIMIT, EMPLOYEE_HEADER
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .serialization import to_json

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def ok(payload: Any, status: int = 200):
    return jsonify(to_json(payload)), status


def message(text: str, status: int = 200, **extra: Any):
    body = {"message": text}
    body.update(to_json(extra))
    return jsonify(body), status


def current_employee_id() -> int:
    """Employee acting on "me" endpoints, taken from the X-Employee-Id header."""
    raw = request.headers.get(EMPLOYEE_HEADER, "").strip()
    if not raw:
        raise ValidationError(f"Missing {EMPLOYEE_HEADER} header")
    try:
        employee_id = int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {EMPLOYEE_HEADER} header")
    if employee_id <= 0:
        raise ValidationError(f"Invalid {EMPLOYEE_HEADER} header")
    return employee_id


def optional_employee_id() -> Optional[int]:
    if not request.headers.get(EMPLOYEE_HEADER, "").strip():
        return None
    return current_employee_id()


def query_int(name: str) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter {name} must be an integer")


def query_limit() -> int:
    limit = query_int("limit")
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return max(1, min(limit, DEFAULT_LIST_LIMIT * 5))


def register_error_handlers(app: Flask) -> None:
    def _error(text: str, status: int):
        return jsonify({"message": text}), status

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(AuthorizationError)
    def handle_authorization(e: AuthorizationError):
        return _error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(ConflictError)
    def handle_conflict(e: ConflictError):
        return _error(str(e), 409)

    @app.errorhandler(HTTPException)
    def handle_http(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return _error(f"Internal error: {e}", 500)
        return _error("Internal server error", 500)
