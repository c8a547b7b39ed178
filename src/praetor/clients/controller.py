from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import current_identity
from ..container import Container
from ..core.enums import ADMIN_ONLY, MANAGER_ROLES


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    roles_required = container.guards.roles_required
    service = container.client_service

    @app.route("/api/clients", methods=["GET"], endpoint="clients_list")
    @login_required
    def list_clients():
        return jsonify([c.to_dict() for c in service.list_visible(current_identity())])

    @app.route("/api/clients/<client_id>", methods=["GET"], endpoint="clients_get")
    @login_required
    def get_client(client_id: str):
        return jsonify(service.get_visible(current_identity(), client_id).to_dict())

    @app.route("/api/clients", methods=["POST"], endpoint="clients_create")
    @login_required
    @roles_required(*MANAGER_ROLES)
    def create_client():
        client = service.create(name=json_body().get("name"))
        return jsonify(client.to_dict()), 201

    @app.route("/api/clients/<client_id>", methods=["DELETE"], endpoint="clients_delete")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def delete_client(client_id: str):
        service.delete(client_id)
        return jsonify({"message": "Client deleted"})
