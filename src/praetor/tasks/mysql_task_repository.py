from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..access.visibility import Scope, Unrestricted
from ..core.exceptions import ReferentialError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, patch_assignments
from .model import Task
from .repository import TaskRepository

_COLUMNS = (
    "t.id, t.name, t.project_id, t.description, t.is_recurring, "
    "t.recurrence_pattern, t.recurrence_start, t.recurrence_end"
)
_MUTABLE = ("name", "description", "is_recurring", "recurrence_pattern", "recurrence_start", "recurrence_end")


def _row_to_task(r: dict) -> Task:
    return Task(
        task_id=r["id"],
        name=r["name"],
        project_id=r["project_id"],
        description=r.get("description"),
        is_recurring=bool(r.get("is_recurring")),
        recurrence_pattern=r.get("recurrence_pattern"),
        recurrence_start=r.get("recurrence_start"),
        recurrence_end=r.get("recurrence_end"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_visible(self, scope: Scope) -> Sequence[Task]:
        where, params = scope.to_sql("t")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks t WHERE {where} ORDER BY t.name", params)
            return [_row_to_task(r) for r in fetchall(cur)]

    def get(self, task_id: str) -> Optional[Task]:
        return self.get_visible(Unrestricted(), task_id)

    def get_visible(self, scope: Scope, task_id: str) -> Optional[Task]:
        where, params = scope.to_sql("t")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks t WHERE t.id=%s AND {where}", (task_id, *params))
            r = fetchone(cur)
            return _row_to_task(r) if r else None

    def create(self, task: Task) -> Task:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO tasks(id, name, project_id, description, is_recurring,
                                      recurrence_pattern, recurrence_start, recurrence_end)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        task.task_id,
                        task.name,
                        task.project_id,
                        task.description,
                        1 if task.is_recurring else 0,
                        task.recurrence_pattern,
                        task.recurrence_start,
                        task.recurrence_end,
                    ),
                )
        except ReferentialError:
            raise ReferentialError("Project not found")
        return task

    def update(self, task_id: str, changes: Mapping[str, Any]) -> bool:
        if "is_recurring" in changes:
            changes = {**changes, "is_recurring": 1 if changes["is_recurring"] else 0}
        sets, params = patch_assignments(changes, _MUTABLE)
        # rowcount reports changed rows, so existence is checked under a row lock.
        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            cur.execute("SELECT id FROM tasks WHERE id=%s FOR UPDATE", (task_id,))
            if not fetchone(cur):
                return False
            if sets:
                cur.execute(f"UPDATE tasks SET {', '.join(sets)} WHERE id=%s", (*params, task_id))
            return True

    def delete(self, task_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s", (task_id,))
            return cur.rowcount > 0
