"""In-memory repositories for service and HTTP tests.

Junction tables are kept as sets of ``frozenset({(column, value), ...})``
rows so both orientations of ``user_work_units`` read the same data, and
visibility scopes are evaluated against them the way the SQL would be.
"""

from __future__ import annotations

import copy
from collections import defaultdict
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence, Set

from praetor.access.visibility import AssignedTo, Scope, SelfOrRoles, Unrestricted
from praetor.assignments.relations import RelationType, relation
from praetor.clients.model import Client
from praetor.commerce.model import Document, DocumentKind
from praetor.core.enums import Role
from praetor.core.exceptions import ConflictError, ReferentialError
from praetor.ldap.model import DirectoryUser, LdapConfig
from praetor.settings.model import GeneralSettings, UserSettings
from praetor.users.model import User
from praetor.work_units.model import ManagerRef, WorkUnit


def _row(**cols) -> frozenset:
    return frozenset(cols.items())


class FakeAssignmentRepository:
    def __init__(self):
        self.tables: Dict[str, Set[frozenset]] = defaultdict(set)
        # member ids that make an insert fail like a missing foreign key
        self.missing_ids: Set[str] = set()
        self.replace_calls = 0

    def add(self, kind: RelationType, owner_id: str, member_id: str) -> None:
        rel = relation(kind)
        self.tables[rel.table].add(_row(**{rel.owner_column: owner_id, rel.member_column: member_id}))

    def list_members(self, kind: RelationType, owner_id: str) -> Sequence[str]:
        rel = relation(kind)
        rows = [dict(r) for r in self.tables[rel.table]]
        return sorted(r[rel.member_column] for r in rows if r[rel.owner_column] == owner_id)

    def replace(self, owner_id: str, targets: Mapping[RelationType, Sequence[str]]) -> None:
        self.replace_calls += 1
        staged = copy.deepcopy(self.tables)
        for kind, member_ids in targets.items():
            rel = relation(kind)
            staged[rel.table] = {r for r in staged[rel.table] if dict(r)[rel.owner_column] != owner_id}
            for member_id in member_ids:
                if member_id in self.missing_ids:
                    raise ReferentialError("Referenced record does not exist")
                staged[rel.table].add(_row(**{rel.owner_column: owner_id, rel.member_column: member_id}))
        self.tables = staged

    def linked(self, scope: AssignedTo, row_id: str) -> bool:
        rel = scope.relation
        return _row(**{rel.user_column: scope.user_id, rel.resource_column: row_id}) in self.tables[rel.table]


def scope_allows(scope: Scope, assignments: FakeAssignmentRepository, row_id: str, role: Optional[Role] = None) -> bool:
    if isinstance(scope, Unrestricted):
        return True
    if isinstance(scope, AssignedTo):
        return assignments.linked(scope, row_id)
    if isinstance(scope, SelfOrRoles):
        return row_id == scope.user_id or (role is not None and role in scope.roles)
    raise TypeError(f"unsupported scope {scope!r}")


class FakeUserRepository:
    def __init__(self, assignments: FakeAssignmentRepository):
        self.assignments = assignments
        self.users: Dict[str, User] = {}

    def add(self, user: User) -> User:
        self.users[user.user_id] = user
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def list_visible(self, scope: Scope) -> Sequence[User]:
        visible = [u for u in self.users.values() if scope_allows(scope, self.assignments, u.user_id, u.role)]
        return sorted(visible, key=lambda u: u.name)

    def create_user(self, *, user_id, name, username, password_hash, role, avatar_initials) -> User:
        if self.get_by_username(username):
            raise ConflictError("Username already exists")
        return self.add(User(user_id, name, username, password_hash, role, avatar_initials))

    def update_profile(self, user_id: str, *, name: str, role: Role, avatar_initials: str) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], name=name, role=role, avatar_initials=avatar_initials)
        return True

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], password_hash=password_hash)
        return True

    def delete_by_id(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None


class _ScopedStore:
    """Dict-backed rows keyed by id, listed by name under a visibility scope."""

    id_attr = ""

    def __init__(self, assignments: FakeAssignmentRepository):
        self.assignments = assignments
        self.rows: Dict[str, object] = {}

    def _id(self, row) -> str:
        return getattr(row, self.id_attr)

    def list_visible(self, scope: Scope):
        visible = [r for r in self.rows.values() if scope_allows(scope, self.assignments, self._id(r))]
        return sorted(visible, key=lambda r: r.name)

    def get(self, row_id: str):
        return self.rows.get(row_id)

    def get_visible(self, scope: Scope, row_id: str):
        row = self.rows.get(row_id)
        return row if row is not None and scope_allows(scope, self.assignments, row_id) else None

    def delete(self, row_id: str) -> bool:
        return self.rows.pop(row_id, None) is not None


class FakeClientRepository(_ScopedStore):
    id_attr = "client_id"

    def create(self, *, client_id: str, name: str):
        self.rows[client_id] = Client(client_id=client_id, name=name)
        return self.rows[client_id]


class FakeProjectRepository(_ScopedStore):
    id_attr = "project_id"

    def __init__(self, assignments: FakeAssignmentRepository, clients: FakeClientRepository):
        super().__init__(assignments)
        self.clients = clients

    def create(self, project):
        if project.client_id not in self.clients.rows:
            raise ReferentialError("Client not found")
        self.rows[project.project_id] = project
        return project


class FakeTaskRepository(_ScopedStore):
    id_attr = "task_id"

    def __init__(self, assignments: FakeAssignmentRepository, projects: FakeProjectRepository):
        super().__init__(assignments)
        self.projects = projects

    def create(self, task):
        if task.project_id not in self.projects.rows:
            raise ReferentialError("Project not found")
        self.rows[task.task_id] = task
        return task

    def update(self, task_id: str, changes: Mapping[str, object]) -> bool:
        if task_id not in self.rows:
            return False
        self.rows[task_id] = replace(self.rows[task_id], **changes)
        return True


class FakeWorkUnitRepository:
    def __init__(self, assignments: FakeAssignmentRepository, users: FakeUserRepository):
        self.assignments = assignments
        self.users = users
        self.units: Dict[str, dict] = {}
        self.writes = 0

    def _view(self, unit_id: str) -> WorkUnit:
        u = self.units[unit_id]
        manager_ids = self.assignments.list_members(RelationType.WORK_UNIT_MANAGERS, unit_id)
        return WorkUnit(
            unit_id=unit_id,
            name=u["name"],
            description=u["description"],
            is_disabled=u["is_disabled"],
            managers=tuple(ManagerRef(m, self.users.users[m].name) for m in manager_ids if m in self.users.users),
            user_count=len(self.assignments.list_members(RelationType.WORK_UNIT_USERS, unit_id)),
        )

    def list_visible(self, scope: Scope) -> Sequence[WorkUnit]:
        ids = [i for i in self.units if scope_allows(scope, self.assignments, i)]
        return sorted((self._view(i) for i in ids), key=lambda w: w.name)

    def get(self, unit_id: str) -> Optional[WorkUnit]:
        return self._view(unit_id) if unit_id in self.units else None

    def get_visible(self, scope: Scope, unit_id: str) -> Optional[WorkUnit]:
        if unit_id in self.units and scope_allows(scope, self.assignments, unit_id):
            return self._view(unit_id)
        return None

    def _check_managers(self, manager_ids: Sequence[str]) -> None:
        if any(m not in self.users.users for m in manager_ids):
            raise ReferentialError("Referenced record does not exist")

    def create(self, *, unit_id, name, description, manager_ids) -> None:
        self._check_managers(manager_ids)
        self.writes += 1
        self.units[unit_id] = {"name": name, "description": description, "is_disabled": False}
        self.assignments.replace(unit_id, {RelationType.WORK_UNIT_MANAGERS: list(manager_ids)})

    def update(self, unit_id, *, name=None, description=None, is_disabled=None, manager_ids=None) -> bool:
        if unit_id not in self.units:
            return False
        if manager_ids is not None:
            self._check_managers(manager_ids)
        self.writes += 1
        patch = {"name": name, "description": description, "is_disabled": is_disabled}
        self.units[unit_id].update({k: v for k, v in patch.items() if v is not None})
        if manager_ids is not None:
            self.assignments.replace(unit_id, {RelationType.WORK_UNIT_MANAGERS: list(manager_ids)})
        return True

    def delete(self, unit_id: str) -> bool:
        if self.units.pop(unit_id, None) is None:
            return False
        for table in ("work_unit_managers", "user_work_units"):
            self.assignments.tables[table] = {
                r for r in self.assignments.tables[table] if dict(r).get("work_unit_id") != unit_id
            }
        return True


class FakeDocumentRepository:
    def __init__(self, kind: DocumentKind):
        self.kind = kind
        self.docs: Dict[str, Document] = {}
        self.writes = 0
        self._clock = 1_700_000_000_000

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    def list_all(self) -> Sequence[Document]:
        return sorted(self.docs.values(), key=lambda d: d.created_at or 0, reverse=True)

    def get(self, doc_id: str) -> Optional[Document]:
        return self.docs.get(doc_id)

    def create(self, doc: Document) -> None:
        self.writes += 1
        now = self._tick()
        self.docs[doc.doc_id] = replace(doc, created_at=now, updated_at=now)

    def update(self, doc_id: str, changes: Mapping[str, object], *, items=None) -> bool:
        current = self.docs.get(doc_id)
        if current is None:
            return False
        self.writes += 1
        extra_keys = {e.column: e.key for e in self.kind.extras}
        header = {c: v for c, v in changes.items() if c not in extra_keys}
        extras = {extra_keys[c]: v for c, v in changes.items() if c in extra_keys}
        self.docs[doc_id] = replace(
            current,
            **header,
            extras={**current.extras, **extras},
            items=tuple(items) if items is not None else current.items,
            updated_at=self._tick(),
        )
        return True

    def delete(self, doc_id: str) -> bool:
        return self.docs.pop(doc_id, None) is not None


class FakeUserSettingsRepository:
    def __init__(self):
        self.rows: Dict[str, UserSettings] = {}

    def get(self, user_id: str) -> Optional[UserSettings]:
        return self.rows.get(user_id)

    def insert_defaults(self, settings: UserSettings) -> None:
        self.rows.setdefault(settings.user_id, settings)

    def update(self, user_id: str, changes: Mapping[str, object]) -> None:
        self.rows[user_id] = replace(self.rows[user_id], **changes)


class FakeGeneralSettingsRepository:
    def __init__(self):
        self.current = GeneralSettings()

    def load(self) -> GeneralSettings:
        return self.current

    def save(self, settings: GeneralSettings) -> None:
        self.current = settings


class FakeLdapConfigRepository:
    def __init__(self, config: Optional[LdapConfig] = None):
        self.config = config or LdapConfig()

    def load(self) -> LdapConfig:
        return self.config

    def update(self, changes: Mapping[str, object]) -> None:
        self.config = replace(self.config, **changes)


class FakeDirectory:
    def __init__(self, users: Optional[List[DirectoryUser]] = None):
        self.users = list(users or [])
        self.seen_configs: List[LdapConfig] = []

    def fetch_users(self, config: LdapConfig) -> Sequence[DirectoryUser]:
        self.seen_configs.append(config)
        return list(self.users)
