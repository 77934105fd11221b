from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.http import error_response, json_body, roles_required, server_error
from ..common.serialization import to_dict
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def create_session():
        data = json_body()
        try:
            # Teachers always create sessions under their own account.
            if session.get("role") == Role.TEACHER.value:
                teacher_id = session.get("account_id")
            else:
                teacher_id = data.get("teacher_id")

            created = container.session_service.create_session(
                batch_id=data.get("batch_id"),
                teacher_id=teacher_id,
                session_date=parse_iso_date(data.get("date", "")),
                session_time=parse_hhmm(data.get("time", "")),
            )
            return jsonify(to_dict(created))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to create session")

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="get_session")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def get_session(session_id: int):
        try:
            return jsonify(to_dict(container.session_service.get_session(session_id)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get session")

    @app.route("/api/batches/<int:batch_id>/sessions", methods=["GET"], endpoint="batch_sessions")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def batch_sessions(batch_id: int):
        try:
            return jsonify(to_dict(list(container.session_service.list_sessions_for_batch(batch_id))))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get sessions")

    @app.route("/api/sessions/<int:session_id>/finalize", methods=["POST"], endpoint="finalize_session")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def finalize_session(session_id: int):
        try:
            return jsonify(to_dict(container.session_service.finalize(session_id)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to finalize session")

    @app.route("/api/sessions/<int:session_id>/attendance", methods=["GET"], endpoint="session_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def session_attendance(session_id: int):
        try:
            return jsonify(to_dict(list(container.session_service.list_attendance(session_id))))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get attendance")

    @app.route("/api/sessions/<int:session_id>/attendance", methods=["POST"], endpoint="mark_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def mark_attendance(session_id: int):
        data = json_body()
        try:
            record = container.session_service.mark_attendance(
                session_id,
                data.get("student_id"),
                data.get("status", ""),
            )
            return jsonify(to_dict(record))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to update attendance")

    @app.route("/api/sessions/<int:session_id>/attendance/bulk", methods=["POST"], endpoint="bulk_mark_attendance")
    @roles_required(Role.TEACHER, Role.ADMIN)
    def bulk_mark_attendance(session_id: int):
        data = json_body()
        try:
            written = container.session_service.bulk_mark_attendance(session_id, data.get("status", ""))
            return jsonify({"success": True, "updated": written})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to bulk update attendance")
