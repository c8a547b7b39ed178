from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..access.visibility import Scope
from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_visible(self, scope: Scope) -> Sequence[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_profile(self, user_id: str, *, name: str, role: Role, avatar_initials: str) -> bool:
        raise NotImplementedError

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
