from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.auth import token_required
from ..common.http import domain_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/save", methods=["POST"], endpoint="attendance_save")
    @token_required
    def attendance_save():
        data = request.get_json(silent=True) or {}
        try:
            session_id = container.session_recorder.record_session(
                owner_id=g.principal.user_id,
                subject=data.get("subject"),
                section=data.get("section"),
                session_meta=data.get("sessionData"),
                session_type=data.get("sessionType"),
                records=data.get("attendanceRecords"),
            )
        except DomainError as e:
            return domain_error_response(e, fallback_message="Failed to save attendance")

        return jsonify({"message": "Attendance saved successfully", "sessionId": session_id})
