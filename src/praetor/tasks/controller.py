from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import current_identity
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = container.guards.login_required
    service = container.task_service

    @app.route("/api/tasks", methods=["GET"], endpoint="tasks_list")
    @login_required
    def list_tasks():
        return jsonify([t.to_dict() for t in service.list_visible(current_identity())])

    @app.route("/api/tasks/<task_id>", methods=["GET"], endpoint="tasks_get")
    @login_required
    def get_task(task_id: str):
        return jsonify(service.get_visible(current_identity(), task_id).to_dict())

    @app.route("/api/tasks", methods=["POST"], endpoint="tasks_create")
    @login_required
    def create_task():
        return jsonify(service.create(json_body()).to_dict()), 201

    @app.route("/api/tasks/<task_id>", methods=["PUT"], endpoint="tasks_update")
    @login_required
    def update_task(task_id: str):
        return jsonify(service.update(task_id, json_body()).to_dict())

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="tasks_delete")
    @login_required
    def delete_task(task_id: str):
        service.delete(task_id)
        return jsonify({"message": "Task deleted"})
