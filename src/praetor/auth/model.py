from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, re-read from the users table on every request."""

    user_id: str
    name: str
    username: str
    role: Role
    avatar_initials: str

    @classmethod
    def from_user(cls, user) -> "Identity":
        return cls(
            user_id=user.user_id,
            name=user.name,
            username=user.username,
            role=user.role,
            avatar_initials=user.avatar_initials,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "username": self.username,
            "role": self.role.value,
            "avatarInitials": self.avatar_initials,
        }
