from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .relations import RelationType


class AssignmentRepository(Protocol):
    def list_members(self, kind: RelationType, owner_id: str) -> Sequence[str]:
        raise NotImplementedError

    def replace(self, owner_id: str, targets: Mapping[RelationType, Sequence[str]]) -> None:
        """Make each relation's stored set for ``owner_id`` equal its target, atomically.

        All relations in ``targets`` are replaced in one transaction; a
        failure on any of them leaves every set unchanged.
        """
        raise NotImplementedError
