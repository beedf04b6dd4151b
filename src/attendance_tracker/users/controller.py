from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import current_user_id, error_body, login_required, manager_required
from ..container import Container
from ..core.exceptions import RecordNotFound

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _start_session(profile) -> None:
        session.clear()
        session.permanent = True
        session["user_id"] = profile.user_id
        session["role"] = profile.role.value

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = request.get_json(silent=True) or {}
        profile = container.user_service.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=data.get("role", "employee"),
            department=data.get("department", ""),
        )
        _start_session(profile)
        return jsonify({"user": profile.to_dict()}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = request.get_json(silent=True) or {}
        profile = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        _start_session(profile)
        logger.info("Login %s (%s)", profile.employee_code, profile.role.value)
        return jsonify({"user": profile.to_dict()})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        profile = container.user_service.get_user(current_user_id())
        if not profile:
            return error_body(RecordNotFound.kind, "User not found"), 404
        return jsonify({"user": profile.to_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"message": "Logged out successfully"})

    @app.route("/api/employees", methods=["GET"], endpoint="employees")
    @manager_required
    def employees():
        return jsonify({"employees": [e.to_dict() for e in container.user_service.list_employees()]})
