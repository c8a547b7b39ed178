"""Role-scoped visibility.

One resolver decides, for a caller's role and id, which rows of a
collection are visible. The decision is a :class:`Scope`; repositories
render it into a WHERE fragment with :meth:`Scope.to_sql`.

Rules:

* admin sees everything;
* manager sees every client/project/task, only the work units they
  manage, and only plain users plus themself;
* user sees clients/projects/tasks assigned to them and only themself;
  work units are not listable for plain users.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Mapping, Tuple

from ..assignments.relations import Relation, RelationType, relation
from ..core.enums import ResourceType, Role
from ..core.exceptions import AuthorizationError, NotFoundError


class Scope(ABC):
    @abstractmethod
    def to_sql(self, alias: str) -> Tuple[str, tuple]:
        """Return ``(where_fragment, params)`` for rows aliased as ``alias``."""


@dataclass(frozen=True)
class Unrestricted(Scope):
    def to_sql(self, alias: str) -> Tuple[str, tuple]:
        return "1=1", ()


@dataclass(frozen=True)
class AssignedTo(Scope):
    """Rows linked to ``user_id`` through the junction table of ``relation``."""

    relation: Relation
    user_id: str

    def to_sql(self, alias: str) -> Tuple[str, tuple]:
        r = self.relation
        return (
            f"{alias}.id IN (SELECT {r.resource_column} FROM {r.table} WHERE {r.user_column}=%s)",
            (self.user_id,),
        )


@dataclass(frozen=True)
class SelfOrRoles(Scope):
    """The caller's own user row, plus every user holding one of ``roles``."""

    user_id: str
    roles: Tuple[Role, ...] = ()

    def to_sql(self, alias: str) -> Tuple[str, tuple]:
        if not self.roles:
            return f"{alias}.id=%s", (self.user_id,)
        marks = ",".join(["%s"] * len(self.roles))
        return (
            f"({alias}.id=%s OR {alias}.role IN ({marks}))",
            (self.user_id, *[r.value for r in self.roles]),
        )


ScopeFactory = Callable[[str], Scope]


def _everything(_: str) -> Scope:
    return Unrestricted()


def _assigned(kind: RelationType) -> ScopeFactory:
    return lambda user_id: AssignedTo(relation(kind), user_id)


def _self_or(*roles: Role) -> ScopeFactory:
    return lambda user_id: SelfOrRoles(user_id, tuple(roles))


# Manager access to clients/projects/tasks is unrestricted; see DESIGN.md.
DEFAULT_RULES: Mapping[ResourceType, Mapping[Role, ScopeFactory]] = {
    ResourceType.CLIENTS: {
        Role.ADMIN: _everything,
        Role.MANAGER: _everything,
        Role.USER: _assigned(RelationType.USER_CLIENTS),
    },
    ResourceType.PROJECTS: {
        Role.ADMIN: _everything,
        Role.MANAGER: _everything,
        Role.USER: _assigned(RelationType.USER_PROJECTS),
    },
    ResourceType.TASKS: {
        Role.ADMIN: _everything,
        Role.MANAGER: _everything,
        Role.USER: _assigned(RelationType.USER_TASKS),
    },
    ResourceType.USERS: {
        Role.ADMIN: _everything,
        Role.MANAGER: _self_or(Role.USER),
        Role.USER: _self_or(),
    },
    ResourceType.WORK_UNITS: {
        Role.ADMIN: _everything,
        Role.MANAGER: _assigned(RelationType.WORK_UNIT_MANAGERS),
    },
}


class VisibilityResolver:
    def __init__(self, rules: Mapping[ResourceType, Mapping[Role, ScopeFactory]] = DEFAULT_RULES):
        self._rules = rules

    def resolve(self, *, role: Role, owner_id: str, resource: ResourceType) -> Scope:
        factory = self._rules.get(resource, {}).get(role)
        if factory is None:
            raise AuthorizationError("Insufficient permissions")
        return factory(owner_id)


def require_visible(row, visible_row, label: str):
    """Resolve a by-id fetch: 404 when absent, 403 when present but out of scope."""
    if row is None:
        raise NotFoundError(f"{label} not found")
    if visible_row is None:
        raise AuthorizationError("Access denied")
    return visible_row
