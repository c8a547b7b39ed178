from __future__ import annotations

from typing import Sequence

from ..access.visibility import VisibilityResolver, require_visible
from ..auth.model import Identity
from ..common import datetime_utils
from ..common.ids import new_id
from ..common.recurrence import validate_pattern
from ..common.validators import (
    optional_bool,
    optional_iso_date,
    optional_non_empty,
    optional_text,
    require_non_empty,
)
from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Task
from .repository import TaskRepository


class TaskService:
    def __init__(self, tasks: TaskRepository, visibility: VisibilityResolver):
        self._tasks = tasks
        self._visibility = visibility

    def _scope(self, identity: Identity):
        return self._visibility.resolve(role=identity.role, owner_id=identity.user_id, resource=ResourceType.TASKS)

    def list_visible(self, identity: Identity) -> Sequence[Task]:
        return self._tasks.list_visible(self._scope(identity))

    def get_visible(self, identity: Identity, task_id: str) -> Task:
        scope = self._scope(identity)
        return require_visible(self._tasks.get(task_id), self._tasks.get_visible(scope, task_id), "Task")

    def create(self, payload: dict) -> Task:
        is_recurring = bool(optional_bool(payload.get("isRecurring"), "isRecurring"))
        task = Task(
            task_id=new_id("t"),
            name=require_non_empty(payload.get("name"), "name"),
            project_id=require_non_empty(payload.get("projectId"), "projectId"),
            description=optional_text(payload.get("description"), "description") or None,
            is_recurring=is_recurring,
            recurrence_pattern=validate_pattern(payload.get("recurrencePattern")) if is_recurring else None,
            recurrence_start=datetime_utils.today() if is_recurring else None,
        )
        return self._tasks.create(task)

    def update(self, task_id: str, payload: dict) -> Task:
        """Apply a task PUT.

        name, description and isRecurring keep their stored value when absent.
        The recurrence fields are taken as sent, so omitting them clears them.
        """
        name = optional_non_empty(payload.get("name"), "name")
        description = optional_text(payload.get("description"), "description")
        is_recurring = optional_bool(payload.get("isRecurring"), "isRecurring")
        start = optional_iso_date(payload.get("recurrenceStart"), "recurrenceStart")
        end = optional_iso_date(payload.get("recurrenceEnd"), "recurrenceEnd")
        if start and end and end < start:
            raise ValidationError("recurrenceEnd must not be before recurrenceStart", "recurrenceEnd")

        changes = {
            "name": name,
            "description": description,
            "is_recurring": is_recurring,
        }
        patch = {column: value for column, value in changes.items() if value is not None}
        patch.update(
            recurrence_pattern=validate_pattern(payload.get("recurrencePattern")),
            recurrence_start=start,
            recurrence_end=end,
        )
        if not self._tasks.update(task_id, patch):
            raise NotFoundError("Task not found")
        updated = self._tasks.get(task_id)
        if updated is None:
            raise NotFoundError("Task not found")
        return updated

    def delete(self, task_id: str) -> None:
        if not self._tasks.delete(task_id):
            raise NotFoundError("Task not found")
