from __future__ import annotations

from typing import Sequence

from werkzeug.security import generate_password_hash

from ..access.visibility import VisibilityResolver
from ..auth.model import Identity
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import ResourceType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .avatar import avatar_initials
from .model import User
from .repository import UserRepository


def parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("role must be one of admin, manager, user", "role")


class UserService:
    """Use case: list, create and delete users."""

    def __init__(self, users: UserRepository, visibility: VisibilityResolver):
        self._users = users
        self._visibility = visibility

    def list_visible(self, identity: Identity) -> Sequence[User]:
        scope = self._visibility.resolve(role=identity.role, owner_id=identity.user_id, resource=ResourceType.USERS)
        return self._users.list_visible(scope)

    def create_account(self, *, name, username, password, role) -> User:
        name = require_non_empty(name, "name")
        username = require_non_empty(username, "username")
        password = require_non_empty(password, "password")
        if role is None:
            raise ValidationError("role is required", "role")
        role = parse_role(role)

        return self._users.create_user(
            user_id=new_id("u"),
            name=name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            avatar_initials=avatar_initials(name),
        )

    def delete_user(self, *, actor: Identity, user_id: str) -> None:
        if actor.role != Role.ADMIN:
            raise AuthorizationError("Insufficient permissions")
        if user_id == actor.user_id:
            raise ValidationError("Cannot delete your own account")
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
