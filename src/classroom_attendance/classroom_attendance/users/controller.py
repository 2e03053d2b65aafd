from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import domain_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            result = container.auth_service.authenticate(data.get("username"), data.get("password"))
        except DomainError as e:
            return domain_error_response(e, fallback_message="Internal server error")

        user = result.user
        return jsonify(
            {
                "token": container.token_service.issue(result.principal),
                "user": {
                    "id": user.user_id,
                    "username": user.username,
                    "role": user.role.value,
                    "firstName": user.first_name,
                    "lastName": user.last_name,
                },
            }
        )
