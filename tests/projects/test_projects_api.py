from __future__ import annotations

from praetor.assignments.relations import RelationType
from praetor.clients.model import Client
from praetor.projects.model import Project


def test_create_project_defaults_color(client, store, auth):
    store.clients.rows["C1"] = Client("C1", "Alpha")

    res = client.post("/api/projects", json={"name": "Site", "clientId": "C1"}, headers=auth("u-mgr"))

    assert res.status_code == 201
    body = res.get_json()
    assert body["color"] == "#3b82f6"
    assert body["clientId"] == "C1"
    assert body["description"] is None


def test_unknown_client_is_400(client, auth):
    res = client.post("/api/projects", json={"name": "Site", "clientId": "ghost"}, headers=auth("u-admin"))
    assert res.status_code == 400
    assert res.get_json() == {"error": "Client not found"}


def test_user_lists_only_assigned_projects(client, store, auth):
    store.projects.rows["P1"] = Project("P1", "One", "C1", "#000000")
    store.projects.rows["P2"] = Project("P2", "Two", "C1", "#000000")
    store.assignments.add(RelationType.USER_PROJECTS, "u-user", "P2")

    res = client.get("/api/projects", headers=auth("u-user"))
    assert [p["id"] for p in res.get_json()] == ["P2"]
    assert client.get("/api/projects/P1", headers=auth("u-user")).status_code == 403


def test_delete_project_is_admin_only(client, store, auth):
    store.projects.rows["P1"] = Project("P1", "One", "C1", "#000000")
    assert client.delete("/api/projects/P1", headers=auth("u-mgr")).status_code == 403
    assert client.delete("/api/projects/P1", headers=auth("u-admin")).get_json() == {"message": "Project deleted"}
