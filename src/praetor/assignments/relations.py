"""Junction tables behind the many-to-many assignments.

A relation is read from the owner's side: ``(owner_column, member_column)``.
``user_work_units`` appears twice because members are replaced per work
unit, while a user's own work-unit list is read per user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

USER_COLUMN = "user_id"


class RelationType(str, Enum):
    USER_CLIENTS = "user_clients"
    USER_PROJECTS = "user_projects"
    USER_TASKS = "user_tasks"
    USER_WORK_UNITS = "user_work_units"
    WORK_UNIT_USERS = "work_unit_users"
    WORK_UNIT_MANAGERS = "work_unit_managers"


@dataclass(frozen=True)
class Relation:
    kind: RelationType
    table: str
    owner_column: str
    member_column: str

    @property
    def user_column(self) -> str:
        return self.owner_column if self.owner_column == USER_COLUMN else self.member_column

    @property
    def resource_column(self) -> str:
        """Column holding the non-user side of the pair."""
        return self.member_column if self.owner_column == USER_COLUMN else self.owner_column


RELATIONS: dict[RelationType, Relation] = {
    RelationType.USER_CLIENTS: Relation(RelationType.USER_CLIENTS, "user_clients", "user_id", "client_id"),
    RelationType.USER_PROJECTS: Relation(RelationType.USER_PROJECTS, "user_projects", "user_id", "project_id"),
    RelationType.USER_TASKS: Relation(RelationType.USER_TASKS, "user_tasks", "user_id", "task_id"),
    RelationType.USER_WORK_UNITS: Relation(RelationType.USER_WORK_UNITS, "user_work_units", "user_id", "work_unit_id"),
    RelationType.WORK_UNIT_USERS: Relation(RelationType.WORK_UNIT_USERS, "user_work_units", "work_unit_id", "user_id"),
    RelationType.WORK_UNIT_MANAGERS: Relation(
        RelationType.WORK_UNIT_MANAGERS, "work_unit_managers", "work_unit_id", "user_id"
    ),
}

# Relations a user's assignment payload may carry, keyed by request field.
USER_ASSIGNMENT_FIELDS: dict[str, RelationType] = {
    "clientIds": RelationType.USER_CLIENTS,
    "projectIds": RelationType.USER_PROJECTS,
    "taskIds": RelationType.USER_TASKS,
}


def relation(kind: RelationType) -> Relation:
    return RELATIONS[kind]
