from __future__ import annotations

from typing import Mapping, Sequence

from ..auth.model import Identity
from ..common.validators import optional_id_list, require_json_object
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ReferentialError
from ..users.repository import UserRepository
from .relations import USER_ASSIGNMENT_FIELDS, RelationType
from .repository import AssignmentRepository


class AssignmentService:
    """Replace-all synchronization of the many-to-many assignment sets."""

    def __init__(self, assignments: AssignmentRepository, users: UserRepository):
        self._assignments = assignments
        self._users = users

    def members(self, kind: RelationType, owner_id: str) -> list[str]:
        return list(self._assignments.list_members(kind, owner_id))

    def synchronize(self, owner_id: str, targets: Mapping[RelationType, Sequence[str]]) -> None:
        """Replace the given relation sets of ``owner_id`` in one transaction."""
        deduped = {kind: list(dict.fromkeys(ids)) for kind, ids in targets.items()}
        try:
            self._assignments.replace(owner_id, deduped)
        except ReferentialError:
            raise ReferentialError("One or more assigned records do not exist")

    def user_assignments(self, *, actor: Identity, user_id: str) -> dict:
        if actor.role == Role.USER and actor.user_id != user_id:
            raise AuthorizationError("Insufficient permissions")
        return {
            field: self.members(kind, user_id)
            for field, kind in USER_ASSIGNMENT_FIELDS.items()
        }

    def replace_user_assignments(self, *, actor: Identity, user_id: str, payload) -> dict:
        if actor.role not in (Role.ADMIN, Role.MANAGER):
            raise AuthorizationError("Insufficient permissions")
        payload = require_json_object(payload)

        targets: dict[RelationType, list[str]] = {}
        for field, kind in USER_ASSIGNMENT_FIELDS.items():
            ids = optional_id_list(payload.get(field), field)
            if ids is not None:
                targets[kind] = ids

        if self._users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")

        self.synchronize(user_id, targets)
        return self.user_assignments(actor=actor, user_id=user_id)
