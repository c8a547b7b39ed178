from __future__ import annotations

from praetor.assignments.relations import RelationType
from praetor.projects.model import Project


def test_any_role_can_create_and_update_tasks(client, store, auth):
    store.projects.rows["P1"] = Project("P1", "One", "C1", "#000000")

    res = client.post("/api/tasks", json={"name": "Write", "projectId": "P1"}, headers=auth("u-user"))
    assert res.status_code == 201
    task_id = res.get_json()["id"]

    res = client.put(
        f"/api/tasks/{task_id}",
        json={"isRecurring": True, "recurrencePattern": "weekly", "recurrenceStart": "2025-01-06"},
        headers=auth("u-user"),
    )
    assert res.status_code == 200
    body = res.get_json()
    assert body["name"] == "Write"
    assert body["recurrencePattern"] == "weekly"
    assert body["recurrenceStart"] == "2025-01-06"
    assert body["recurrenceEnd"] is None


def test_user_only_lists_assigned_tasks(client, store, auth):
    store.projects.rows["P1"] = Project("P1", "One", "C1", "#000000")
    for name in ("A", "B"):
        client.post("/api/tasks", json={"name": name, "projectId": "P1"}, headers=auth("u-admin"))
    task_b = next(t for t in store.tasks.rows.values() if t.name == "B")
    store.assignments.add(RelationType.USER_TASKS, "u-user", task_b.task_id)

    res = client.get("/api/tasks", headers=auth("u-user"))
    assert [t["name"] for t in res.get_json()] == ["B"]
    assert len(client.get("/api/tasks", headers=auth("u-mgr")).get_json()) == 2


def test_unknown_task_is_404(client, auth):
    assert client.put("/api/tasks/nope", json={}, headers=auth("u-admin")).status_code == 404
    assert client.delete("/api/tasks/nope", headers=auth("u-admin")).status_code == 404
    assert client.get("/api/tasks/nope", headers=auth("u-admin")).status_code == 404
