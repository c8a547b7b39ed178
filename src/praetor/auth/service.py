from __future__ import annotations

from typing import Iterable, Optional, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Identity
from .tokens import TokenIssuer


def bearer_token(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not header:
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthService:
    """Use cases: login, credential verification and role checks."""

    def __init__(self, users: UserRepository, tokens: TokenIssuer):
        self._users = users
        self._tokens = tokens

    def _password_matches(self, user: User, password: str) -> bool:
        try:
            return check_password_hash(user.password_hash, password)
        except Exception:
            # e.g. placeholder hashes or corrupted values
            return False

    def login(self, username, password) -> Tuple[str, User]:
        username = require_non_empty(username, "username")
        password = require_non_empty(password, "password")

        user = self._users.get_by_username(username)
        if not user or not self._password_matches(user, password):
            raise AuthenticationError("Invalid username or password")
        return self._tokens.issue(user.user_id), user

    def authenticate(self, raw_credential: Optional[str]) -> Identity:
        if not raw_credential:
            raise AuthenticationError("Access token required")

        user_id = self._tokens.subject(raw_credential)
        if user_id is None:
            raise AuthenticationError("Invalid or expired token")

        user = self._users.get_by_id(user_id)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return Identity.from_user(user)

    @staticmethod
    def authorize(identity: Optional[Identity], allowed_roles: Iterable[Role]) -> None:
        if identity is None:
            raise AuthenticationError("Authentication required")
        if identity.role not in tuple(allowed_roles):
            raise AuthorizationError("Insufficient permissions")

    def change_password(self, identity: Identity, *, current_password, new_password) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current and new passwords are required")
        current_password = require_non_empty(current_password, "currentPassword")
        new_password = require_non_empty(new_password, "newPassword")

        user = self._users.get_by_id(identity.user_id)
        if user is None:
            raise NotFoundError("User not found")
        if not self._password_matches(user, current_password):
            raise ValidationError("Incorrect current password", "currentPassword")

        self._users.update_password_hash(user.user_id, generate_password_hash(new_password))
