from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import current_identity
from ..container import Container
from ..core.enums import ADMIN_ONLY, MANAGER_ROLES


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    roles_required = container.guards.roles_required

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @login_required
    def list_users():
        users = container.user_service.list_visible(current_identity())
        return jsonify([u.to_dict() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def create_user():
        body = json_body()
        user = container.user_service.create_account(
            name=body.get("name"),
            username=body.get("username"),
            password=body.get("password"),
            role=body.get("role"),
        )
        return jsonify(user.to_dict()), 201

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def delete_user(user_id: str):
        container.user_service.delete_user(actor=current_identity(), user_id=user_id)
        return jsonify({"message": "User deleted"})

    @app.route("/api/users/<user_id>/assignments", methods=["GET"], endpoint="users_assignments")
    @login_required
    def get_assignments(user_id: str):
        return jsonify(container.assignment_service.user_assignments(actor=current_identity(), user_id=user_id))

    @app.route("/api/users/<user_id>/assignments", methods=["POST"], endpoint="users_assignments_update")
    @login_required
    @roles_required(*MANAGER_ROLES)
    def update_assignments(user_id: str):
        assignments = container.assignment_service.replace_user_assignments(
            actor=current_identity(), user_id=user_id, payload=json_body()
        )
        return jsonify({"message": "Assignments updated", **assignments})
