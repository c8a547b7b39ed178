from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class ManagerRef:
    user_id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name}


@dataclass(frozen=True)
class WorkUnit:
    """A work unit as listed: its own columns plus managers and live member count."""

    unit_id: str
    name: str
    description: Optional[str] = None
    is_disabled: bool = False
    managers: Tuple[ManagerRef, ...] = field(default_factory=tuple)
    user_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.unit_id,
            "name": self.name,
            "description": self.description,
            "isDisabled": self.is_disabled,
            "managers": [m.to_dict() for m in self.managers],
            "userCount": self.user_count,
        }
