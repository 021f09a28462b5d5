from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import ErrorKind
from ..core.exceptions import DomainError, ValidationError
from ..logging_config import LogContext

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
}


def json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def client_ip() -> Optional[str]:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr


def register_error_handlers(app: Flask) -> None:
    @app.before_request
    def _bind_request_context():
        LogContext.clear()
        LogContext.set(request_id=request.headers.get("X-Request-Id") or str(uuid.uuid4()))

    @app.errorhandler(DomainError)
    def _domain_error(err: DomainError):
        status = STATUS_BY_KIND.get(err.kind, 400)
        logger.info("%s %s -> %d %s: %s", request.method, request.path, status, err.code.value, err.message)
        return jsonify(err.to_dict()), status

    @app.errorhandler(Exception)
    def _unexpected(err: Exception):
        if isinstance(err, HTTPException):
            return jsonify({"message": err.description}), err.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"message": "Internal Server Error."}), 500
