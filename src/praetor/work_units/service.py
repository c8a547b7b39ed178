from __future__ import annotations

from typing import Sequence

from ..access.visibility import VisibilityResolver, require_visible
from ..assignments.relations import RelationType
from ..assignments.service import AssignmentService
from ..auth.model import Identity
from ..common.ids import new_id
from ..common.validators import (
    optional_bool,
    optional_id_list,
    optional_non_empty,
    optional_text,
    require_id_list,
    require_non_empty,
)
from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError, ReferentialError, ValidationError
from .model import WorkUnit
from .repository import WorkUnitRepository


class WorkUnitService:
    def __init__(
        self,
        work_units: WorkUnitRepository,
        assignments: AssignmentService,
        visibility: VisibilityResolver,
    ):
        self._work_units = work_units
        self._assignments = assignments
        self._visibility = visibility

    def _scope(self, identity: Identity):
        return self._visibility.resolve(
            role=identity.role, owner_id=identity.user_id, resource=ResourceType.WORK_UNITS
        )

    def _require(self, unit_id: str) -> WorkUnit:
        unit = self._work_units.get(unit_id)
        if unit is None:
            raise NotFoundError("Work unit not found")
        return unit

    def list_visible(self, identity: Identity) -> Sequence[WorkUnit]:
        return self._work_units.list_visible(self._scope(identity))

    def create(self, payload: dict) -> WorkUnit:
        name = require_non_empty(payload.get("name"), "name")
        manager_ids = require_id_list(payload.get("managerIds") or [], "managerIds")
        if not manager_ids:
            raise ValidationError("At least one manager is required", "managerIds")
        description = optional_text(payload.get("description"), "description")

        unit_id = new_id("wu")
        try:
            self._work_units.create(unit_id=unit_id, name=name, description=description, manager_ids=manager_ids)
        except ReferentialError:
            raise ReferentialError("One or more managers do not exist")
        return self._require(unit_id)

    def update(self, unit_id: str, payload: dict) -> WorkUnit:
        name = optional_non_empty(payload.get("name"), "name")
        description = optional_text(payload.get("description"), "description")
        is_disabled = optional_bool(payload.get("isDisabled"), "isDisabled")
        manager_ids = optional_id_list(payload.get("managerIds"), "managerIds")

        try:
            found = self._work_units.update(
                unit_id,
                name=name,
                description=description,
                is_disabled=is_disabled,
                manager_ids=manager_ids,
            )
        except ReferentialError:
            raise ReferentialError("One or more managers do not exist")
        if not found:
            raise NotFoundError("Work unit not found")
        return self._require(unit_id)

    def delete(self, unit_id: str) -> None:
        if not self._work_units.delete(unit_id):
            raise NotFoundError("Work unit not found")

    def members(self, identity: Identity, unit_id: str) -> list[str]:
        """Member ids of a unit the caller may see (admin, or one of its managers)."""
        scope = self._scope(identity)
        require_visible(self._work_units.get(unit_id), self._work_units.get_visible(scope, unit_id), "Work unit")
        return self._assignments.members(RelationType.WORK_UNIT_USERS, unit_id)

    def replace_members(self, unit_id: str, payload: dict) -> list[str]:
        user_ids = require_id_list(payload.get("userIds"), "userIds")
        self._require(unit_id)
        self._assignments.synchronize(unit_id, {RelationType.WORK_UNIT_USERS: user_ids})
        return self._assignments.members(RelationType.WORK_UNIT_USERS, unit_id)
