from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from ..core.exceptions import AuthenticationError


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Access token required")
    return token.strip()


def token_required(view):
    """Verify the bearer token and expose the caller as ``g.principal``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        tokens = current_app.extensions["classroom_attendance"].token_service
        g.principal = tokens.decode(_bearer_token())
        return view(*args, **kwargs)

    return wrapper

