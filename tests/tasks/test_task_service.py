from __future__ import annotations

from datetime import date

import pytest

from praetor.access.visibility import VisibilityResolver
from praetor.common import datetime_utils
from praetor.core.exceptions import NotFoundError, ReferentialError, ValidationError
from praetor.projects.model import Project
from praetor.tasks.service import TaskService


@pytest.fixture
def service(store, monkeypatch):
    store.projects.rows["P1"] = Project("P1", "One", "C1", "#000000")
    monkeypatch.setattr(datetime_utils, "today", lambda: date(2025, 5, 1))
    return TaskService(store.tasks, VisibilityResolver())


def test_recurring_task_starts_today(service):
    task = service.create({"name": "Standup", "projectId": "P1", "isRecurring": True, "recurrencePattern": "monthly:first:1"})

    assert task.recurrence_start == date(2025, 5, 1)
    assert task.to_dict()["recurrenceStart"] == "2025-05-01"
    assert task.recurrence_pattern == "monthly:first:1"


def test_one_off_task_has_no_recurrence(service):
    task = service.create({"name": "Fix", "projectId": "P1", "recurrencePattern": "daily"})
    assert task.is_recurring is False
    assert task.recurrence_pattern is None
    assert task.recurrence_start is None


def test_invalid_pattern_and_unknown_project(service):
    with pytest.raises(ValidationError, match="recurrencePattern"):
        service.create({"name": "X", "projectId": "P1", "isRecurring": True, "recurrencePattern": "hourly"})
    with pytest.raises(ReferentialError, match="Project not found"):
        service.create({"name": "X", "projectId": "P9"})


def test_update_keeps_name_but_replaces_recurrence(service):
    task = service.create({"name": "Standup", "projectId": "P1", "isRecurring": True, "recurrencePattern": "daily"})

    updated = service.update(task.task_id, {"description": "15 minutes", "isRecurring": False})

    assert updated.name == "Standup"
    assert updated.description == "15 minutes"
    assert updated.is_recurring is False
    assert updated.recurrence_pattern is None
    assert updated.recurrence_start is None


def test_update_rejects_inverted_range(service):
    task = service.create({"name": "Standup", "projectId": "P1"})
    with pytest.raises(ValidationError, match="recurrenceEnd"):
        service.update(task.task_id, {"recurrenceStart": "2025-06-01", "recurrenceEnd": "2025-05-01"})


def test_update_and_delete_unknown_task(service):
    with pytest.raises(NotFoundError):
        service.update("t-missing", {"name": "x"})
    with pytest.raises(NotFoundError):
        service.delete("t-missing")


def test_patch_does_not_revert_a_field_written_in_between(service, store):
    task = service.create({"name": "Standup", "projectId": "P1"})
    original_update = store.tasks.update

    def update_after_rename(task_id, changes):
        store.tasks.update = original_update
        service.update(task_id, {"name": "Daily sync"})
        return original_update(task_id, changes)

    store.tasks.update = update_after_rename
    service.update(task.task_id, {"description": "15 minutes"})

    stored = store.tasks.get(task.task_id)
    assert stored.name == "Daily sync"
    assert stored.description == "15 minutes"
