from __future__ import annotations

from typing import Sequence

from ..access.visibility import VisibilityResolver, require_visible
from ..auth.model import Identity
from ..common.ids import new_id
from ..common.validators import optional_non_empty, optional_text, require_non_empty
from ..core.constants import DEFAULT_PROJECT_COLOR
from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError
from .model import Project
from .repository import ProjectRepository


class ProjectService:
    def __init__(self, projects: ProjectRepository, visibility: VisibilityResolver):
        self._projects = projects
        self._visibility = visibility

    def _scope(self, identity: Identity):
        return self._visibility.resolve(role=identity.role, owner_id=identity.user_id, resource=ResourceType.PROJECTS)

    def list_visible(self, identity: Identity) -> Sequence[Project]:
        return self._projects.list_visible(self._scope(identity))

    def get_visible(self, identity: Identity, project_id: str) -> Project:
        scope = self._scope(identity)
        return require_visible(
            self._projects.get(project_id), self._projects.get_visible(scope, project_id), "Project"
        )

    def create(self, *, name, client_id, description=None, color=None) -> Project:
        project = Project(
            project_id=new_id("p"),
            name=require_non_empty(name, "name"),
            client_id=require_non_empty(client_id, "clientId"),
            color=optional_non_empty(color, "color") or DEFAULT_PROJECT_COLOR,
            description=optional_text(description, "description") or None,
        )
        return self._projects.create(project)

    def delete(self, project_id: str) -> None:
        if not self._projects.delete(project_id):
            raise NotFoundError("Project not found")
