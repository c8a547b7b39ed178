from __future__ import annotations

from typing import Optional, Sequence

from ..access.visibility import Scope, Unrestricted
from ..core.exceptions import ReferentialError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "p.id, p.name, p.client_id, p.color, p.description"


def _row_to_project(r: dict) -> Project:
    return Project(
        project_id=r["id"],
        name=r["name"],
        client_id=r["client_id"],
        color=r["color"],
        description=r.get("description"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_visible(self, scope: Scope) -> Sequence[Project]:
        where, params = scope.to_sql("p")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects p WHERE {where} ORDER BY p.name", params)
            return [_row_to_project(r) for r in fetchall(cur)]

    def get(self, project_id: str) -> Optional[Project]:
        return self.get_visible(Unrestricted(), project_id)

    def get_visible(self, scope: Scope, project_id: str) -> Optional[Project]:
        where, params = scope.to_sql("p")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects p WHERE p.id=%s AND {where}", (project_id, *params))
            r = fetchone(cur)
            return _row_to_project(r) if r else None

    def create(self, project: Project) -> Project:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO projects(id, name, client_id, color, description)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (project.project_id, project.name, project.client_id, project.color, project.description),
                )
        except ReferentialError:
            raise ReferentialError("Client not found")
        return project

    def delete(self, project_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE id=%s", (project_id,))
            return cur.rowcount > 0
