from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import error_response, json_body, roles_required, server_error
from ..common.serialization import to_dict
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _details_json(d) -> dict:
        return {
            **to_dict(d.batch),
            "teacher_name": d.teacher_name,
            "student_count": d.student_count,
            "session_count": d.session_count,
        }

    @app.route("/api/batches", methods=["GET"], endpoint="list_batches")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def list_batches():
        try:
            return jsonify([_details_json(d) for d in container.batch_service.list_with_details()])
        except Exception:
            return server_error("Failed to get batches")

    @app.route("/api/batches", methods=["POST"], endpoint="create_batch")
    @roles_required(Role.ADMIN)
    def create_batch():
        data = json_body()
        try:
            batch = container.batch_service.create_batch(
                current_role=Role(session["role"]),
                name=data.get("name", ""),
                teacher_id=data.get("teacher_id"),
                description=data.get("description"),
            )
            return jsonify(to_dict(batch))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to create batch")

    @app.route("/api/teacher/<int:teacher_id>/batches", methods=["GET"], endpoint="teacher_batches")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def teacher_batches(teacher_id: int):
        try:
            return jsonify(to_dict(list(container.batch_service.list_for_teacher(teacher_id))))
        except Exception:
            return server_error("Failed to get batches")

    @app.route("/api/batches/<int:batch_id>/students", methods=["GET"], endpoint="batch_students")
    @roles_required(Role.ADMIN, Role.TEACHER)
    def batch_students(batch_id: int):
        try:
            return jsonify(to_dict(list(container.student_service.list_for_batch(batch_id))))
        except Exception:
            return server_error("Failed to get students")
