from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import error_response, roles_required, server_error
from ..common.serialization import to_dict
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _student_json(s) -> dict:
        return {**to_dict(s.student), **to_dict(s.summary)}

    def _ensure_guardian_owns(student_id: int) -> None:
        """Guardians may only read the students linked to their mobile number."""
        if session.get("role") != Role.GUARDIAN.value:
            return
        student = container.student_service.get_student(student_id)
        if student.guardian_mobile != session.get("mobile"):
            raise AuthorizationError("You do not have permission")

    @app.route("/api/students/<int:student_id>/attendance", methods=["GET"], endpoint="student_attendance")
    @roles_required(Role.GUARDIAN, Role.TEACHER, Role.ADMIN)
    def student_attendance(student_id: int):
        try:
            _ensure_guardian_owns(student_id)
            return jsonify(_student_json(container.aggregator.student_with_attendance(student_id)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get student attendance")

    @app.route("/api/students/<int:student_id>/heatmap", methods=["GET"], endpoint="student_heatmap")
    @roles_required(Role.GUARDIAN, Role.TEACHER, Role.ADMIN)
    def student_heatmap(student_id: int):
        try:
            _ensure_guardian_owns(student_id)
            limit = request.args.get("limit", type=int)
            return jsonify(to_dict(container.aggregator.compute_heatmap(student_id, limit=limit)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get heatmap data")

    @app.route("/api/batches/<int:batch_id>/analytics", methods=["GET"], endpoint="batch_analytics")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def batch_analytics(batch_id: int):
        try:
            return jsonify([_student_json(s) for s in container.aggregator.batch_analytics(batch_id)])
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get analytics")

    @app.route("/api/batches/<int:batch_id>/leaderboard", methods=["GET"], endpoint="batch_leaderboard")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def batch_leaderboard(batch_id: int):
        try:
            ranked = container.aggregator.batch_leaderboard(batch_id)
            return jsonify([{"rank": i, **_student_json(s)} for i, s in enumerate(ranked, start=1)])
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get leaderboard")
