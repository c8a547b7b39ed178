from __future__ import annotations

import json
from typing import Any, Mapping

from ..core.constants import LDAP_CONFIG_ID
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json, patch_assignments, placeholders
from .model import LdapConfig, RoleMapping
from .repository import LdapConfigRepository


_COLUMNS = (
    "enabled",
    "server_url",
    "base_dn",
    "bind_dn",
    "bind_password",
    "user_filter",
    "group_base_dn",
    "group_filter",
    "role_mappings",
)


def _to_column(name: str, value: Any) -> Any:
    if name == "enabled":
        return 1 if value else 0
    if name == "role_mappings":
        return json.dumps([m.to_dict() for m in value])
    return value


def _row_to_config(r: dict) -> LdapConfig:
    mappings = load_json(r.get("role_mappings"), [])
    return LdapConfig(
        enabled=bool(r.get("enabled")),
        server_url=r["server_url"],
        base_dn=r["base_dn"],
        bind_dn=r["bind_dn"],
        bind_password=r.get("bind_password") or "",
        user_filter=r["user_filter"],
        group_base_dn=r["group_base_dn"],
        group_filter=r["group_filter"],
        role_mappings=tuple(RoleMapping(ldap_group=m["ldapGroup"], role=Role(m["role"])) for m in mappings),
    )


class MySQLLdapConfigRepository(LdapConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> LdapConfig:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT enabled, server_url, base_dn, bind_dn, bind_password,
                       user_filter, group_base_dn, group_filter, role_mappings
                FROM ldap_config WHERE id=%s
                """,
                (LDAP_CONFIG_ID,),
            )
            r = fetchone(cur)
        return _row_to_config(r) if r else LdapConfig()

    def update(self, changes: Mapping[str, Any]) -> None:
        defaults = LdapConfig()
        sets, params = patch_assignments({k: _to_column(k, v) for k, v in changes.items()}, _COLUMNS)
        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO ldap_config(id, {", ".join(_COLUMNS)})
                VALUES(%s,{placeholders(_COLUMNS)})
                ON DUPLICATE KEY UPDATE id=id
                """,
                (LDAP_CONFIG_ID, *(_to_column(c, getattr(defaults, c)) for c in _COLUMNS)),
            )
            if sets:
                cur.execute(
                    f"UPDATE ldap_config SET {', '.join(sets)}, updated_at=CURRENT_TIMESTAMP WHERE id=%s",
                    (*params, LDAP_CONFIG_ID),
                )
