from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..access.visibility import Scope
from .model import Task


class TaskRepository(Protocol):
    def list_visible(self, scope: Scope) -> Sequence[Task]:
        raise NotImplementedError

    def get(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def get_visible(self, scope: Scope, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def create(self, task: Task) -> Task:
        raise NotImplementedError

    def update(self, task_id: str, changes: Mapping[str, Any]) -> bool:
        """Write only the columns in ``changes``; False when the task does not exist."""
        raise NotImplementedError

    def delete(self, task_id: str) -> bool:
        raise NotImplementedError
