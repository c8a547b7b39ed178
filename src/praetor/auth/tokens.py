from __future__ import annotations

import time
from typing import Optional

from jose import JWTError, jwt

from ..core.constants import TOKEN_EXPIRE_DAYS


class TokenIssuer:
    """Signs and verifies bearer tokens.

    Tokens carry only the user id (``sub``) and an expiry; role and profile
    are re-read from the store on every request.
    """

    def __init__(self, secret: str, *, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm
        self._expire_seconds = TOKEN_EXPIRE_DAYS * 24 * 60 * 60

    def issue(self, user_id: str, *, now: Optional[int] = None) -> str:
        issued_at = int(time.time()) if now is None else int(now)
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._expire_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def subject(self, token: str) -> Optional[str]:
        """Return the user id of a valid token, ``None`` when invalid or expired."""
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None
        sub = claims.get("sub")
        return sub if isinstance(sub, str) and sub else None
