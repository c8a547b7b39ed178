from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]


_ROLE_RANK = {Role.USER: 1, Role.MANAGER: 2, Role.ADMIN: 3}

# Role sets used by the route guards ("minimum role" in the API table).
MANAGER_ROLES = (Role.ADMIN, Role.MANAGER)
ADMIN_ONLY = (Role.ADMIN,)


class ResourceType(str, Enum):
    """Collections whose listing depends on the caller's role."""

    CLIENTS = "clients"
    PROJECTS = "projects"
    TASKS = "tasks"
    USERS = "users"
    WORK_UNITS = "work_units"


class StartOfWeek(str, Enum):
    MONDAY = "Monday"
    SUNDAY = "Sunday"


class Language(str, Enum):
    EN = "en"
    IT = "it"
