from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    EditWindowExpiredError,
    InvalidTransitionError,
    NotFoundError,
    SessionLockedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (SessionLockedError, 403),
    (EditWindowExpiredError, 403),
    (InvalidTransitionError, 400),
    (ValidationError, 400),
)


def error_response(exc: DomainError):
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return jsonify({"success": False, "message": str(exc)}), code
    return jsonify({"success": False, "message": str(exc)}), 400


def server_error(message: str):
    logger.exception(message)
    return jsonify({"success": False, "message": message}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_role() -> Role | None:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def roles_required(*roles: Role):
    """Allow only logged-in accounts whose role is in `roles`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            role = current_role()
            if role is None:
                return jsonify({"success": False, "message": "Please log in to continue"}), 401
            if role not in roles:
                return jsonify({"success": False, "message": "You do not have permission"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
