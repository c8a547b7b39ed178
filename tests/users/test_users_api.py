from __future__ import annotations


def test_admin_self_delete_is_400_and_row_remains(client, store, auth):
    res = client.delete("/api/users/u-admin", headers=auth("u-admin"))

    assert res.status_code == 400
    assert res.get_json() == {"error": "Cannot delete your own account"}
    assert "u-admin" in store.users.users


def test_create_user_returns_201_without_password_hash(client, auth):
    res = client.post(
        "/api/users",
        json={"name": "Nina Neri", "username": "nina", "password": "pw", "role": "user"},
        headers=auth("u-admin"),
    )

    assert res.status_code == 201
    body = res.get_json()
    assert body["username"] == "nina"
    assert "passwordHash" not in body and "password_hash" not in body


def test_duplicate_username_is_409(client, auth):
    res = client.post(
        "/api/users",
        json={"name": "X", "username": "admin", "password": "pw", "role": "user"},
        headers=auth("u-admin"),
    )
    assert res.status_code == 409


def test_manager_cannot_create_users(client, auth):
    res = client.post(
        "/api/users",
        json={"name": "X", "username": "x", "password": "pw", "role": "user"},
        headers=auth("u-mgr"),
    )
    assert res.status_code == 403


def test_assignments_round_trip(client, auth):
    res = client.post(
        "/api/users/u-user/assignments",
        json={"clientIds": ["c1"], "projectIds": ["p1", "p1"], "taskIds": []},
        headers=auth("u-mgr"),
    )
    assert res.status_code == 200

    got = client.get("/api/users/u-user/assignments", headers=auth("u-user")).get_json()
    assert got == {"clientIds": ["c1"], "projectIds": ["p1"], "taskIds": []}


def test_user_cannot_read_other_users_assignments(client, auth):
    assert client.get("/api/users/u-other/assignments", headers=auth("u-user")).status_code == 403


def test_assignments_with_unknown_reference_are_400(client, store, auth):
    store.assignments.missing_ids.add("c-missing")
    res = client.post(
        "/api/users/u-user/assignments",
        json={"clientIds": ["c-missing"]},
        headers=auth("u-admin"),
    )
    assert res.status_code == 400
