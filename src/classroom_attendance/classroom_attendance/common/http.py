from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationError: 400,
    AuthenticationError: 401,
    PersistenceError: 500,
}

# Messages for these are never shown to callers.
_INTERNAL_ERRORS = (PersistenceError,)


def error_response(message: str, code: str, status: int):
    return jsonify({"error": message, "code": code}), status


def domain_error_response(exc: DomainError, *, fallback_message: str = "Internal server error"):
    status = next((s for cls, s in STATUS_BY_ERROR.items() if isinstance(exc, cls)), 500)
    if isinstance(exc, _INTERNAL_ERRORS) or status == 500:
        logger.error("%s: %s", type(exc).__name__, exc, exc_info=exc)
        return error_response(fallback_message, exc.code, status)
    logger.warning("%s: %s", type(exc).__name__, exc)
    return error_response(str(exc), exc.code, status)
