from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> Mapping[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be JSON")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        body: dict[str, Any] = {"error": str(exc)}
        if isinstance(exc, ValidationError):
            body["error"] = "Validation failed"
            body["details"] = [{"field": e.field, "message": e.message} for e in exc.errors]
        if isinstance(exc, StorageError):
            logger.error("%s %s -> storage error: %s", request.method, request.path, exc)
        return jsonify(body), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
