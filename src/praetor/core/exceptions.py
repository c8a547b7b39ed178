from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``field`` carries the offending field path (e.g. ``items[2].quantity``)
    when the failure is tied to a single input field.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class AuthenticationError(DomainError):
    """Raised when a credential is missing, invalid, expired or orphaned."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an id has no matching row."""


class ConflictError(DomainError):
    """Raised on unique constraint violations."""


class ReferentialError(DomainError):
    """Raised when a row references another row that does not exist."""


class DirectoryError(DomainError):
    """Raised when the external LDAP directory cannot be reached or queried."""
