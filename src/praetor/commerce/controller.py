from __future__ import annotations

from flask import Flask, jsonify

from ..api.http import json_body
from ..auth.guard import Guards
from ..container import Container
from ..core.enums import MANAGER_ROLES
from .service import CompositeWriter


def _register_documents(app: Flask, guards: Guards, writer: CompositeWriter, *, base: str, name: str) -> None:
    login_required = guards.login_required
    manager_only = guards.roles_required(*MANAGER_ROLES)

    @app.route(base, methods=["GET"], endpoint=f"{name}_list")
    @login_required
    @manager_only
    def list_documents():
        return jsonify([d.to_dict() for d in writer.list_all()])

    @app.route(base, methods=["POST"], endpoint=f"{name}_create")
    @login_required
    @manager_only
    def create_document():
        return jsonify(writer.create(json_body()).to_dict()), 201

    @app.route(f"{base}/<doc_id>", methods=["PUT"], endpoint=f"{name}_update")
    @login_required
    @manager_only
    def update_document(doc_id: str):
        return jsonify(writer.update(doc_id, json_body()).to_dict())

    @app.route(f"{base}/<doc_id>", methods=["DELETE"], endpoint=f"{name}_delete")
    @login_required
    @manager_only
    def delete_document(doc_id: str):
        writer.delete(doc_id)
        return "", 204


def register(app: Flask, container: Container) -> None:
    _register_documents(app, container.guards, container.quote_writer, base="/api/quotes", name="quotes")
    _register_documents(app, container.guards, container.sale_writer, base="/api/sales", name="sales")
