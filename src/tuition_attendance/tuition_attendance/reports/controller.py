from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import error_response, roles_required, server_error
from ..common.serialization import to_dict
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @roles_required(Role.ADMIN)
    def admin_stats():
        try:
            stats = container.stats_service.get_stats(current_role=Role(session["role"]))
            return jsonify(to_dict(stats))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Failed to get stats")
