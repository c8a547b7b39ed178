from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_date


@dataclass(frozen=True)
class Task:
    task_id: str
    name: str
    project_id: str
    description: Optional[str] = None
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None
    recurrence_start: Optional[date] = None
    recurrence_end: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "id": self.task_id,
            "name": self.name,
            "projectId": self.project_id,
            "description": self.description,
            "isRecurring": self.is_recurring,
            "recurrencePattern": self.recurrence_pattern,
            "recurrenceStart": format_date(self.recurrence_start),
            "recurrenceEnd": format_date(self.recurrence_end),
        }
