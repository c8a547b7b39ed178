from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import current_identity
from ..container import Container
from ..core.enums import ADMIN_ONLY


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    roles_required = container.guards.roles_required

    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    @login_required
    def get_settings():
        return jsonify(container.user_settings_service.get_or_create(current_identity()).to_dict())

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    @login_required
    def update_settings():
        settings = container.user_settings_service.update(current_identity(), json_body())
        return jsonify(settings.to_dict())

    @app.route("/api/settings/password", methods=["PUT"], endpoint="settings_password")
    @login_required
    def change_password():
        body = json_body()
        container.auth_service.change_password(
            current_identity(),
            current_password=body.get("currentPassword"),
            new_password=body.get("newPassword"),
        )
        return jsonify({"message": "Password updated successfully"})

    @app.route("/api/general-settings", methods=["GET"], endpoint="general_settings_get")
    @login_required
    def get_general_settings():
        return jsonify(container.general_settings_service.load().to_dict())

    @app.route("/api/general-settings", methods=["PUT"], endpoint="general_settings_update")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def update_general_settings():
        return jsonify(container.general_settings_service.update(json_body()).to_dict())
