"""Session and request helpers shared by the JSON controllers."""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..teachers.service import SessionUser


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session or "role" not in session:
        return None
    return SessionUser.from_session(session)


def login_user(user: SessionUser) -> None:
    session.clear()
    session.update(user.to_session())


def _unauthorized():
    return jsonify({"success": False, "message": "Silakan login terlebih dahulu", "retryable": False}), 401


def _forbidden():
    return jsonify({"success": False, "message": "Anda tidak memiliki akses", "retryable": False}), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return _unauthorized()
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return _unauthorized()
            if user.role.value not in allowed:
                return _forbidden()
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = roles_required(Role.ADMIN)
staff_required = roles_required(Role.ADMIN, Role.WALI_KELAS, Role.GURU_MAPEL)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def arg(name: str, default: str = "") -> str:
    return (request.args.get(name) or default).strip()


def ok(payload: Optional[dict] = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status
