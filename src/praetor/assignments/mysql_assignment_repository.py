from __future__ import annotations

from typing import Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .relations import Relation, RelationType, relation
from .repository import AssignmentRepository


def select_members(cur, rel: Relation, owner_id: str) -> list[str]:
    cur.execute(
        f"SELECT {rel.member_column} AS member_id FROM {rel.table} "
        f"WHERE {rel.owner_column}=%s ORDER BY {rel.member_column}",
        (owner_id,),
    )
    return [r["member_id"] for r in fetchall(cur)]


def replace_members(cur, rel: Relation, owner_id: str, member_ids: Sequence[str]) -> None:
    """Delete-then-insert on an open transaction.

    The insert tolerates duplicates through ON DUPLICATE KEY UPDATE rather
    than INSERT IGNORE, which would also swallow foreign-key failures.
    """
    cur.execute(f"DELETE FROM {rel.table} WHERE {rel.owner_column}=%s", (owner_id,))
    for member_id in member_ids:
        cur.execute(
            f"""
            INSERT INTO {rel.table}({rel.owner_column}, {rel.member_column})
            VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE {rel.owner_column}={rel.owner_column}
            """,
            (owner_id, member_id),
        )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_members(self, kind: RelationType, owner_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            return select_members(cur, relation(kind), owner_id)

    def replace(self, owner_id: str, targets: Mapping[RelationType, Sequence[str]]) -> None:
        if not targets:
            return
        with db_cursor(self._conn_factory, transaction=True) as (_, cur):
            for kind, member_ids in targets.items():
                replace_members(cur, relation(kind), owner_id, member_ids)
