from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import token_required
from ..common.http import domain_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/analytics", methods=["GET"], endpoint="attendance_analytics")
    @token_required
    def attendance_analytics():
        try:
            report = container.analytics_service.get_analytics()
        except DomainError as e:
            return domain_error_response(e, fallback_message="Failed to fetch analytics")
        return jsonify(report.to_dict())
