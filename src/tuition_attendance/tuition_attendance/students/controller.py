from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import error_response, json_body, roles_required, server_error
from ..common.serialization import to_dict
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @roles_required(Role.ADMIN)
    def list_students():
        try:
            return jsonify(to_dict(list(container.student_service.list_students())))
        except Exception:
            return server_error("Failed to get students")

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @roles_required(Role.ADMIN)
    def create_student():
        data = json_body()
        try:
            student = container.student_service.create_student(
                current_role=Role(session["role"]),
                name=data.get("name", ""),
                batch_id=data.get("batch_id"),
                guardian_mobile=data.get("guardian_mobile", ""),
            )
            return jsonify(to_dict(student))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to create student")
