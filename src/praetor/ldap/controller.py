from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..container import Container
from ..core.enums import ADMIN_ONLY


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    admin_only = container.guards.roles_required(*ADMIN_ONLY)
    service = container.ldap_service

    @app.route("/api/ldap/config", methods=["GET"], endpoint="ldap_config_get")
    @login_required
    @admin_only
    def get_config():
        return jsonify(service.load_config().to_dict())

    @app.route("/api/ldap/config", methods=["PUT"], endpoint="ldap_config_update")
    @login_required
    @admin_only
    def update_config():
        return jsonify(service.update_config(json_body()).to_dict())

    @app.route("/api/ldap/sync", methods=["POST"], endpoint="ldap_sync")
    @login_required
    @admin_only
    def sync():
        stats = service.sync_users(service.load_config())
        return jsonify({"success": True, **stats.to_dict()})
