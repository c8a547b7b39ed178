from __future__ import annotations

from typing import Optional, Sequence

from ..access.visibility import Scope, Unrestricted
from ..assignments.mysql_assignment_repository import replace_members
from ..assignments.relations import RelationType, relation
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json
from .model import ManagerRef, WorkUnit
from .repository import WorkUnitRepository

# Managers and member count come from correlated subqueries, so a listing is one statement.
_VIEW_SQL = """
    SELECT w.id, w.name, w.description, w.is_disabled,
        (
            SELECT COALESCE(JSON_ARRAYAGG(JSON_OBJECT('id', u.id, 'name', u.name)), JSON_ARRAY())
            FROM work_unit_managers wum
            JOIN users u ON u.id = wum.user_id
            WHERE wum.work_unit_id = w.id
        ) AS managers,
        (SELECT COUNT(*) FROM user_work_units uw WHERE uw.work_unit_id = w.id) AS user_count
    FROM work_units w
"""


def _row_to_unit(r: dict) -> WorkUnit:
    managers = load_json(r.get("managers"), [])
    return WorkUnit(
        unit_id=r["id"],
        name=r["name"],
        description=r.get("description"),
        is_disabled=bool(r.get("is_disabled")),
        managers=tuple(ManagerRef(user_id=m["id"], name=m["name"]) for m in managers),
        user_count=int(r.get("user_count") or 0),
    )


class MySQLWorkUnitRepository(WorkUnitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_visible(self, scope: Scope) -> Sequence[WorkUnit]:
        where, params = scope.to_sql("w")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_VIEW_SQL} WHERE {where} ORDER BY w.name", params)
            return [_row_to_unit(r) for r in fetchall(cur)]

    def get(self, unit_id: str) -> Optional[WorkUnit]:
        return self.get_visible(Unrestricted(), unit_id)

    def get_visible(self, scope: Scope, unit_id: str) -> Optional[WorkUnit]:
        where, params = scope.to_sql("w")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_VIEW_SQL} WHERE w.id=%s AND {where}", (unit_id, *params))
            r = fetchone(cur)
            return _row_to_unit(r) if r else None

    def create(self, *, unit_id: str, name: str, description: Optional[str], manager_ids: Sequence[str]) -> None:
        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            cur.execute(
                "INSERT INTO work_units(id, name, description) VALUES(%s,%s,%s)",
                (unit_id, name, description),
            )
            replace_members(cur, relation(RelationType.WORK_UNIT_MANAGERS), unit_id, manager_ids)

    def update(
        self,
        unit_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_disabled: Optional[bool] = None,
        manager_ids: Optional[Sequence[str]] = None,
    ) -> bool:
        sets: list[str] = []
        params: list = []
        if name is not None:
            sets.append("name=%s")
            params.append(name)
        if description is not None:
            sets.append("description=%s")
            params.append(description)
        if is_disabled is not None:
            sets.append("is_disabled=%s")
            params.append(1 if is_disabled else 0)

        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            cur.execute("SELECT id FROM work_units WHERE id=%s FOR UPDATE", (unit_id,))
            if not fetchone(cur):
                return False
            if sets:
                cur.execute(f"UPDATE work_units SET {', '.join(sets)} WHERE id=%s", (*params, unit_id))
            if manager_ids is not None:
                replace_members(cur, relation(RelationType.WORK_UNIT_MANAGERS), unit_id, manager_ids)
            return True

    def delete(self, unit_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_units WHERE id=%s", (unit_id,))
            return cur.rowcount > 0
