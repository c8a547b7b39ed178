from __future__ import annotations

from typing import Optional, Sequence

from ..access.visibility import Scope
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "u.id, u.name, u.username, u.password_hash, u.role, u.avatar_initials"


def _row_to_user(row: dict) -> User:
    return User(
        user_id=row["id"],
        name=row["name"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        avatar_initials=row.get("avatar_initials") or "",
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u WHERE u.id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u WHERE u.username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_visible(self, scope: Scope) -> Sequence[User]:
        where, params = scope.to_sql("u")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u WHERE {where} ORDER BY u.name", params)
            return [_row_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        username: str,
        password_hash: str,
        role: Role,
        avatar_initials: str,
    ) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(id, name, username, password_hash, role, avatar_initials)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (user_id, name, username, password_hash, role.value, avatar_initials),
                )
        except ConflictError:
            raise ConflictError("Username already exists")
        return User(
            user_id=user_id,
            name=name,
            username=username,
            password_hash=password_hash,
            role=role,
            avatar_initials=avatar_initials,
        )

    def update_profile(self, user_id: str, *, name: str, role: Role, avatar_initials: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, role=%s, avatar_initials=%s WHERE id=%s",
                (name, role.value, avatar_initials, user_id),
            )
            return cur.rowcount > 0

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
