from __future__ import annotations

from dataclasses import dataclass

import pytest
from werkzeug.security import generate_password_hash

from praetor.auth.model import Identity
from praetor.auth.tokens import TokenIssuer
from praetor.commerce.model import QUOTE, SALE
from praetor.container import Container, assemble_container
from praetor.core.enums import Role
from praetor.users.model import User

from fakes import (
    FakeAssignmentRepository,
    FakeClientRepository,
    FakeDirectory,
    FakeDocumentRepository,
    FakeGeneralSettingsRepository,
    FakeLdapConfigRepository,
    FakeProjectRepository,
    FakeTaskRepository,
    FakeUserRepository,
    FakeUserSettingsRepository,
    FakeWorkUnitRepository,
)

PASSWORD = "secret-pass"


@dataclass
class Store:
    assignments: FakeAssignmentRepository
    users: FakeUserRepository
    clients: FakeClientRepository
    projects: FakeProjectRepository
    tasks: FakeTaskRepository
    work_units: FakeWorkUnitRepository
    quotes: FakeDocumentRepository
    sales: FakeDocumentRepository
    user_settings: FakeUserSettingsRepository
    general_settings: FakeGeneralSettingsRepository
    ldap_config: FakeLdapConfigRepository
    directory: FakeDirectory


@pytest.fixture
def store() -> Store:
    assignments = FakeAssignmentRepository()
    users = FakeUserRepository(assignments)
    clients = FakeClientRepository(assignments)
    projects = FakeProjectRepository(assignments, clients)
    s = Store(
        assignments=assignments,
        users=users,
        clients=clients,
        projects=projects,
        tasks=FakeTaskRepository(assignments, projects),
        work_units=FakeWorkUnitRepository(assignments, users),
        quotes=FakeDocumentRepository(QUOTE),
        sales=FakeDocumentRepository(SALE),
        user_settings=FakeUserSettingsRepository(),
        general_settings=FakeGeneralSettingsRepository(),
        ldap_config=FakeLdapConfigRepository(),
        directory=FakeDirectory(),
    )
    password_hash = generate_password_hash(PASSWORD)
    users.add(User("u-admin", "Alice Admin", "admin", password_hash, Role.ADMIN, "AA"))
    users.add(User("u-mgr", "Mario Manager", "manager", password_hash, Role.MANAGER, "MM"))
    users.add(User("u-user", "Ugo User", "user", password_hash, Role.USER, "UU"))
    users.add(User("u-other", "Olga Other", "other", password_hash, Role.USER, "OO"))
    return s


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer("test-jwt-secret")


@pytest.fixture
def container(store: Store, tokens: TokenIssuer) -> Container:
    return assemble_container(
        tokens=tokens,
        users_repo=store.users,
        assignments_repo=store.assignments,
        clients_repo=store.clients,
        projects_repo=store.projects,
        tasks_repo=store.tasks,
        work_units_repo=store.work_units,
        quotes_repo=store.quotes,
        sales_repo=store.sales,
        user_settings_repo=store.user_settings,
        general_settings_repo=store.general_settings,
        ldap_config_repo=store.ldap_config,
        directory=store.directory,
    )


@pytest.fixture
def app(container: Container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from praetor.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth(tokens: TokenIssuer):
    """``auth("u-admin")`` -> request headers carrying a valid bearer token."""

    def headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {tokens.issue(user_id)}"}

    return headers


@pytest.fixture
def identities(store: Store) -> dict:
    return {u.username: Identity.from_user(u) for u in store.users.users.values()}
