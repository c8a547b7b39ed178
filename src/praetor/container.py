from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .access.visibility import VisibilityResolver
from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .assignments.service import AssignmentService
from .auth.guard import Guards
from .auth.service import AuthService
from .auth.tokens import TokenIssuer
from .clients.mysql_client_repository import MySQLClientRepository
from .clients.repository import ClientRepository
from .clients.service import ClientService
from .commerce.model import QUOTE, SALE
from .commerce.mysql_document_repository import MySQLDocumentRepository
from .commerce.repository import DocumentRepository
from .commerce.service import CompositeWriter
from .database.connection import DBConfig, DatabaseConnection
from .ldap.directory import DirectoryClient, Ldap3DirectoryClient
from .ldap.mysql_ldap_config_repository import MySQLLdapConfigRepository
from .ldap.repository import LdapConfigRepository
from .ldap.service import LdapService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .settings.mysql_settings_repository import MySQLGeneralSettingsRepository, MySQLUserSettingsRepository
from .settings.repository import GeneralSettingsRepository, UserSettingsRepository
from .settings.service import GeneralSettingsService, UserSettingsService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService
from .work_units.mysql_work_unit_repository import MySQLWorkUnitRepository
from .work_units.repository import WorkUnitRepository
from .work_units.service import WorkUnitService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    guards: Guards

    auth_service: AuthService
    user_service: UserService
    assignment_service: AssignmentService
    client_service: ClientService
    project_service: ProjectService
    task_service: TaskService
    work_unit_service: WorkUnitService
    quote_writer: CompositeWriter
    sale_writer: CompositeWriter
    user_settings_service: UserSettingsService
    general_settings_service: GeneralSettingsService
    ldap_service: LdapService


def assemble_container(
    *,
    tokens: TokenIssuer,
    users_repo: UserRepository,
    assignments_repo: AssignmentRepository,
    clients_repo: ClientRepository,
    projects_repo: ProjectRepository,
    tasks_repo: TaskRepository,
    work_units_repo: WorkUnitRepository,
    quotes_repo: DocumentRepository,
    sales_repo: DocumentRepository,
    user_settings_repo: UserSettingsRepository,
    general_settings_repo: GeneralSettingsRepository,
    ldap_config_repo: LdapConfigRepository,
    directory: DirectoryClient,
    visibility: Optional[VisibilityResolver] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL in production, in-memory in tests)."""
    visibility = visibility or VisibilityResolver()

    auth_service = AuthService(users_repo, tokens)
    assignment_service = AssignmentService(assignments_repo, users_repo)

    return Container(
        conn=conn,
        guards=Guards(auth_service),
        auth_service=auth_service,
        user_service=UserService(users_repo, visibility),
        assignment_service=assignment_service,
        client_service=ClientService(clients_repo, visibility),
        project_service=ProjectService(projects_repo, visibility),
        task_service=TaskService(tasks_repo, visibility),
        work_unit_service=WorkUnitService(work_units_repo, assignment_service, visibility),
        quote_writer=CompositeWriter(quotes_repo, QUOTE),
        sale_writer=CompositeWriter(sales_repo, SALE),
        user_settings_service=UserSettingsService(user_settings_repo),
        general_settings_service=GeneralSettingsService(general_settings_repo),
        ldap_service=LdapService(ldap_config_repo, users_repo, directory),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        tokens=TokenIssuer(jwt_secret, algorithm=jwt_algorithm),
        users_repo=MySQLUserRepository(conn),
        assignments_repo=MySQLAssignmentRepository(conn),
        clients_repo=MySQLClientRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        work_units_repo=MySQLWorkUnitRepository(conn),
        quotes_repo=MySQLDocumentRepository(conn, QUOTE),
        sales_repo=MySQLDocumentRepository(conn, SALE),
        user_settings_repo=MySQLUserSettingsRepository(conn),
        general_settings_repo=MySQLGeneralSettingsRepository(conn),
        ldap_config_repo=MySQLLdapConfigRepository(conn),
        directory=Ldap3DirectoryClient(),
        conn=conn,
    )
