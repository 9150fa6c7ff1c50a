from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "code": "LOGIN_REQUIRED", "message": "Please log in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        username = data.get("username", "")
        password = data.get("password", "")

        try:
            s_user = container.auth_service.authenticate(username, password)
        except (AuthenticationError, ValidationError) as e:
            return jsonify({"success": False, "code": e.code, "message": str(e)}), 401

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        # Each activation reconciles sessions left open past end of day.
        report = container.reconciler.sweep()

        return jsonify(
            {
                "success": True,
                "user": {"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value},
                "autoClockOut": report.to_dict(),
            }
        ), 200

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True}), 200

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {"id": session["user_id"], "name": session.get("name"), "role": session.get("role")}
        ), 200
