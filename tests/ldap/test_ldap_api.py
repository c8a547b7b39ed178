from __future__ import annotations

from praetor.ldap.model import DirectoryUser


def test_config_defaults_and_admin_only(client, auth):
    assert client.get("/api/ldap/config", headers=auth("u-mgr")).status_code == 403

    body = client.get("/api/ldap/config", headers=auth("u-admin")).get_json()
    assert body["enabled"] is False
    assert body["userFilter"] == "(uid={0})"
    assert body["groupFilter"] == "(member={0})"
    assert body["roleMappings"] == []


def test_sync_disabled_is_400(client, auth):
    res = client.post("/api/ldap/sync", headers=auth("u-admin"))
    assert res.status_code == 400


def test_sync_reports_stats(client, store, auth):
    headers = auth("u-admin")
    client.put("/api/ldap/config", json={"enabled": True}, headers=headers)
    store.directory.users = [DirectoryUser("jdoe", "John Doe")]

    res = client.post("/api/ldap/sync", headers=headers)

    assert res.status_code == 200
    assert res.get_json() == {"success": True, "synced": 1, "created": 1, "updated": 0}
