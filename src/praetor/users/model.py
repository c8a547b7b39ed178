from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object; ``password_hash`` never leaves the service layer.
    """

    user_id: str
    name: str
    username: str
    password_hash: str
    role: Role
    avatar_initials: str

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "username": self.username,
            "role": self.role.value,
            "avatarInitials": self.avatar_initials,
        }
