"""Request guards.

``login_required`` moves a request from anonymous to authenticated by
resolving the bearer token to a live user (stored on ``flask.g``);
``roles_required`` then checks the caller's role. Failures raise domain
errors, which the API error handlers turn into 401/403 responses.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.enums import Role
from .model import Identity
from .service import AuthService, bearer_token


def current_identity() -> Optional[Identity]:
    return g.get("identity")


class Guards:
    def __init__(self, auth_service: AuthService):
        self._auth = auth_service

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token(request.headers.get("Authorization"))
            g.identity = self._auth.authenticate(token)
            return view(*args, **kwargs)

        return wrapper

    def roles_required(self, *roles: Role):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                self._auth.authorize(current_identity(), roles)
                return view(*args, **kwargs)

            return wrapper

        return decorator
