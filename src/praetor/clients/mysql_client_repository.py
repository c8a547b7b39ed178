from __future__ import annotations

from typing import Optional, Sequence

from ..access.visibility import Scope, Unrestricted
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Client
from .repository import ClientRepository


class MySQLClientRepository(ClientRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_visible(self, scope: Scope) -> Sequence[Client]:
        where, params = scope.to_sql("c")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT c.id, c.name FROM clients c WHERE {where} ORDER BY c.name", params)
            return [Client(client_id=r["id"], name=r["name"]) for r in fetchall(cur)]

    def get(self, client_id: str) -> Optional[Client]:
        return self.get_visible(Unrestricted(), client_id)

    def get_visible(self, scope: Scope, client_id: str) -> Optional[Client]:
        where, params = scope.to_sql("c")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT c.id, c.name FROM clients c WHERE c.id=%s AND {where}",
                (client_id, *params),
            )
            r = fetchone(cur)
            return Client(client_id=r["id"], name=r["name"]) if r else None

    def create(self, *, client_id: str, name: str) -> Client:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO clients(id, name) VALUES(%s,%s)", (client_id, name))
        return Client(client_id=client_id, name=name)

    def delete(self, client_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM clients WHERE id=%s", (client_id,))
            return cur.rowcount > 0
