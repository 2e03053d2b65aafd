from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import token_required
from ..common.http import domain_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students/enrolled", methods=["GET"], endpoint="students_enrolled")
    @token_required
    def students_enrolled():
        try:
            return jsonify(container.student_service.list_enrolled())
        except DomainError as e:
            return domain_error_response(e, fallback_message="Failed to fetch students")

    @app.route("/api/students/enroll", methods=["POST"], endpoint="students_enroll")
    @token_required
    def students_enroll():
        data = request.get_json(silent=True) or {}
        try:
            student = container.student_service.enroll(
                student_id=data.get("studentId"),
                full_name=data.get("fullName"),
                face_signature=data.get("faceEmbedding"),
                section=data.get("section"),
            )
        except DomainError as e:
            return domain_error_response(e, fallback_message="Failed to enroll student")

        return jsonify(
            {
                "message": "Student enrolled successfully",
                "student": {
                    "student_id": student.student_id,
                    "full_name": student.full_name,
                    "section": student.section,
                    "enrollment_date": student.enrollment_date.isoformat() if student.enrollment_date else None,
                },
            }
        )
