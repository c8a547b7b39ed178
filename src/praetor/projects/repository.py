from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..access.visibility import Scope
from .model import Project


class ProjectRepository(Protocol):
    def list_visible(self, scope: Scope) -> Sequence[Project]:
        raise NotImplementedError

    def get(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def get_visible(self, scope: Scope, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def create(self, project: Project) -> Project:
        raise NotImplementedError

    def delete(self, project_id: str) -> bool:
        raise NotImplementedError
