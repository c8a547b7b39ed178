from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..container import Container
from .guard import current_identity


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = json_body()
        token, user = container.auth_service.login(body.get("username"), body.get("password"))
        app.logger.info("User %s logged in", user.username)
        return jsonify({"token": token, "user": user.to_dict()})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return jsonify(current_identity().to_dict())
