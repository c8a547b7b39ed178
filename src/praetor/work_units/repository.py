from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..access.visibility import Scope
from .model import WorkUnit


class WorkUnitRepository(Protocol):
    def list_visible(self, scope: Scope) -> Sequence[WorkUnit]:
        raise NotImplementedError

    def get(self, unit_id: str) -> Optional[WorkUnit]:
        raise NotImplementedError

    def get_visible(self, scope: Scope, unit_id: str) -> Optional[WorkUnit]:
        raise NotImplementedError

    def create(self, *, unit_id: str, name: str, description: Optional[str], manager_ids: Sequence[str]) -> None:
        """Insert the unit and its managers in one transaction."""
        raise NotImplementedError

    def update(
        self,
        unit_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_disabled: Optional[bool] = None,
        manager_ids: Optional[Sequence[str]] = None,
    ) -> bool:
        """Patch the given fields and optionally replace managers, atomically.

        ``None`` leaves a field unchanged. Returns False for an unknown id.
        """
        raise NotImplementedError

    def delete(self, unit_id: str) -> bool:
        raise NotImplementedError
