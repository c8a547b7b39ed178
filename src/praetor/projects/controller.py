from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import current_identity
from ..container import Container
from ..core.enums import ADMIN_ONLY, MANAGER_ROLES


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    roles_required = container.guards.roles_required
    service = container.project_service

    @app.route("/api/projects", methods=["GET"], endpoint="projects_list")
    @login_required
    def list_projects():
        return jsonify([p.to_dict() for p in service.list_visible(current_identity())])

    @app.route("/api/projects/<project_id>", methods=["GET"], endpoint="projects_get")
    @login_required
    def get_project(project_id: str):
        return jsonify(service.get_visible(current_identity(), project_id).to_dict())

    @app.route("/api/projects", methods=["POST"], endpoint="projects_create")
    @login_required
    @roles_required(*MANAGER_ROLES)
    def create_project():
        body = json_body()
        project = service.create(
            name=body.get("name"),
            client_id=body.get("clientId"),
            description=body.get("description"),
            color=body.get("color"),
        )
        return jsonify(project.to_dict()), 201

    @app.route("/api/projects/<project_id>", methods=["DELETE"], endpoint="projects_delete")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def delete_project(project_id: str):
        service.delete(project_id)
        return jsonify({"message": "Project deleted"})
