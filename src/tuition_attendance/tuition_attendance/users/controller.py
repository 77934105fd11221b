from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import error_response, json_body, roles_required, server_error
from ..common.serialization import to_dict
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _login(account) -> None:
        session.clear()
        session["account_id"] = account.account_id
        session["name"] = account.name
        session["role"] = account.role.value

    @app.route("/api/admin/signup", methods=["POST"], endpoint="admin_signup")
    def admin_signup():
        data = json_body()
        try:
            admin = container.account_service.signup_admin(
                email=data.get("email", ""),
                name=data.get("name", ""),
                password=data.get("password", ""),
            )
            return jsonify(to_dict(admin))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to create admin")

    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = json_body()
        try:
            account = container.auth_service.authenticate_admin(data.get("email", ""), data.get("password", ""))
            _login(account)
            return jsonify(to_dict(account))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Login failed")

    @app.route("/api/teacher/login", methods=["POST"], endpoint="teacher_login")
    def teacher_login():
        data = json_body()
        try:
            account = container.auth_service.authenticate_teacher(
                data.get("teacher_code", ""),
                data.get("password", ""),
            )
            _login(account)
            return jsonify(to_dict(account))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Login failed")

    @app.route("/api/guardian/login", methods=["POST"], endpoint="guardian_login")
    def guardian_login():
        data = json_body()
        try:
            students = container.auth_service.authenticate_guardian(data.get("mobile", ""))
            session.clear()
            session["role"] = Role.GUARDIAN.value
            session["mobile"] = students[0].guardian_mobile
            return jsonify({"students": to_dict(list(students))})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Login failed")

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/guardian/students", methods=["GET"], endpoint="guardian_students")
    @roles_required(Role.GUARDIAN, Role.ADMIN)
    def guardian_students():
        mobile = request.args.get("mobile") or session.get("mobile") or ""
        if not mobile:
            return jsonify({"success": False, "message": "Mobile number required"}), 400
        if session.get("role") == Role.GUARDIAN.value and mobile != session.get("mobile"):
            return jsonify({"success": False, "message": "You do not have permission"}), 403
        try:
            return jsonify(to_dict(list(container.student_service.list_for_guardian(mobile))))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get students")

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @roles_required(Role.ADMIN)
    def list_teachers():
        try:
            return jsonify(to_dict(list(container.account_service.list_teachers())))
        except Exception:
            return server_error("Failed to get teachers")

    @app.route("/api/teachers", methods=["POST"], endpoint="create_teacher")
    @roles_required(Role.ADMIN)
    def create_teacher():
        data = json_body()
        try:
            teacher = container.account_service.create_teacher(
                current_role=Role(session["role"]),
                teacher_code=data.get("teacher_code", ""),
                name=data.get("name", ""),
                password=data.get("password", ""),
            )
            return jsonify(to_dict(teacher))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to create teacher")
