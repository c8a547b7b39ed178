from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import current_identity
from ..container import Container
from ..core.enums import ADMIN_ONLY, MANAGER_ROLES


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    roles_required = container.guards.roles_required
    service = container.work_unit_service

    @app.route("/api/work-units", methods=["GET"], endpoint="work_units_list")
    @login_required
    @roles_required(*MANAGER_ROLES)
    def list_work_units():
        return jsonify([w.to_dict() for w in service.list_visible(current_identity())])

    @app.route("/api/work-units", methods=["POST"], endpoint="work_units_create")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def create_work_unit():
        return jsonify(service.create(json_body()).to_dict()), 201

    @app.route("/api/work-units/<unit_id>", methods=["PUT"], endpoint="work_units_update")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def update_work_unit(unit_id: str):
        return jsonify(service.update(unit_id, json_body()).to_dict())

    @app.route("/api/work-units/<unit_id>", methods=["DELETE"], endpoint="work_units_delete")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def delete_work_unit(unit_id: str):
        service.delete(unit_id)
        return jsonify({"message": "Work unit deleted"})

    @app.route("/api/work-units/<unit_id>/users", methods=["GET"], endpoint="work_units_users")
    @login_required
    def list_members(unit_id: str):
        return jsonify(service.members(current_identity(), unit_id))

    @app.route("/api/work-units/<unit_id>/users", methods=["POST"], endpoint="work_units_users_update")
    @login_required
    @roles_required(*ADMIN_ONLY)
    def replace_members(unit_id: str):
        service.replace_members(unit_id, json_body())
        return jsonify({"message": "Work unit users updated"})
